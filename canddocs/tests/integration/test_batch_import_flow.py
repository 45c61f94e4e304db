"""End-to-end batch import over real PDFs, the file store and JSON repositories.

OCR is replaced by a reader of the PDF text layer so the pipeline runs
without a Tesseract binary.
"""
from __future__ import annotations

from pathlib import Path

import fitz  # type: ignore
import pytest

from canddocs.application.commands.update_candidate import UpdateCandidateHandler
from canddocs.application.commands.upload_batch import UploadBatchCommand, UploadBatchHandler
from canddocs.application.commands.validate_corrected_document import (
    ValidateCorrectedDocumentCommand,
    ValidateCorrectedDocumentHandler,
)
from canddocs.domain.exceptions import MalformedDocumentError
from canddocs.domain.services.document_validator import DocumentValidator
from canddocs.domain.value_objects.error_kind import ErrorKind
from canddocs.domain.value_objects.storage_scope import FolderRole
from canddocs.infrastructure.ocr.candidate_parser import RegexCandidateParser
from canddocs.infrastructure.pdf.pdf_page_ops import PdfPageOps
from canddocs.infrastructure.persistence.file_candidate_repository import FileCandidateRepository
from canddocs.infrastructure.persistence.file_import_error_repository import FileImportErrorRepository
from canddocs.infrastructure.storage.file_store import FileStore
from canddocs.schemas.candidate_schemas import UpdateCandidateRequest, UploadBatchRequest


class TextLayerOcr:
    """Returns the embedded text of the requested page."""

    def __init__(self):
        self.fail_on = set()
        self.calls = 0

    def extract_text_from_pdf(self, pdf_bytes: bytes, page_number: int = 1) -> str:
        self.calls += 1
        if self.calls in self.fail_on:
            raise RuntimeError("tesseract exited with code 1")
        with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
            return document.load_page(page_number - 1).get_text().upper()


def front_page(name: str, number: str, year: int = 2024) -> str:
    return f"CANDIDATE NAME {name}\nCANDIDATE NUMBER {number}\nCENTRE NUMBER C001\nSESSION {year}"


def build_batch(pages) -> bytes:
    document = fitz.open()
    try:
        for text in pages:
            page = document.new_page()
            y = 72
            for line in text.splitlines():
                page.insert_text((72, y), line, fontsize=12)
                y += 20
        return document.tobytes()
    finally:
        document.close()


@pytest.fixture
def env(tmp_path, sleeps):
    store = FileStore(tmp_path / "Storage", sleep=sleeps.append)
    candidates = FileCandidateRepository(base_dir=str(tmp_path / "data"))
    errors = FileImportErrorRepository(base_dir=str(tmp_path / "data"))
    ocr = TextLayerOcr()
    handler = UploadBatchHandler(
        pdf_ops=PdfPageOps(),
        ocr=ocr,
        file_store=store,
        candidates=candidates,
        errors=errors,
        parser=RegexCandidateParser(),
        validator=DocumentValidator(),
    )
    return {
        "root": tmp_path / "Storage",
        "staging": tmp_path / "staging",
        "store": store,
        "candidates": candidates,
        "errors": errors,
        "ocr": ocr,
        "handler": handler,
    }


def stage(env, pages, name="upload.pdf") -> Path:
    env["staging"].mkdir(exist_ok=True)
    path = env["staging"] / name
    path.write_bytes(build_batch(pages))
    return path


def run(env, source):
    request = UploadBatchRequest(exam_year=2024, exam_code="WAEC", centre_number="C001")
    return env["handler"].handle(UploadBatchCommand(request=request, source_file_path=str(source), uploaded_by="clerk"))


def scope_dir(env, role):
    return env["root"] / "2024" / "WAEC" / "C001" / role


def test_four_pages_two_valid_candidates(env):
    source = stage(env, [front_page("JOHN DOE", "0012"), "RESULTS", front_page("JANE ROE", "0013"), "RESULTS"])

    result = run(env, source)

    assert result.total_candidates == 2
    assert result.errors == []
    assert [Path(p).name for p in result.saved_file_paths] == ["2024_WAEC_C001_0001.pdf", "2024_WAEC_C001_0002.pdf"]
    for path in result.saved_file_paths:
        assert FolderRole.of_path(path) is FolderRole.SUCCESS
        with fitz.open(path) as merged:
            assert merged.page_count == 2

    stored = env["candidates"].find_valid()
    assert [(d.candidate_name, d.candidate_number) for d in stored] == [("JOHN DOE", "0012"), ("JANE ROE", "0013")]
    assert env["errors"].find_all() == []

    assert not source.exists()
    assert (scope_dir(env, "imported") / "upload_Tr.pdf").exists()


def test_dangling_last_page(env):
    source = stage(env, [front_page("JOHN DOE", "0012"), "RESULTS", front_page("JANE ROE", "0013")])

    result = run(env, source)

    assert result.total_candidates == 2
    with fitz.open(result.saved_file_paths[1]) as last:
        assert last.page_count == 1


def test_invalid_candidate_then_correction_round_trip(env):
    source = stage(env, [front_page("JOHN DOE", "12A3"), "RESULTS"])

    result = run(env, source)

    assert result.errors == ["[1] Validation failed."]
    assert result.saved_file_paths == []
    (document,) = env["candidates"].find_invalid()
    assert FolderRole.of_path(document.file_path) is FolderRole.ERRORS
    assert Path(document.file_path).exists()
    assert not (scope_dir(env, "success") / "2024_WAEC_C001_0001.pdf").exists()

    (error,) = env["errors"].find_for_document(document.id)
    assert error.error_type is ErrorKind.INVALID_FORMAT
    assert error.field_name == "CandidateNumber"
    assert error.file_path == document.file_path

    validate = ValidateCorrectedDocumentHandler(env["candidates"], env["errors"], env["store"])
    premature = validate.handle(ValidateCorrectedDocumentCommand(document_id=document.id))
    assert premature.error == "Document still invalid. Fix data first."

    updated = UpdateCandidateHandler(env["candidates"]).handle(
        UpdateCandidateRequest(
            id=document.id, candidate_name="JOHN DOE", candidate_number="1203", session=2024, centre_code="C001"
        )
    )
    assert updated.success
    assert FolderRole.of_path(env["candidates"].find_by_id(document.id).file_path) is FolderRole.ERRORS

    first = validate.handle(ValidateCorrectedDocumentCommand(document_id=document.id))
    assert first.success
    assert FolderRole.of_path(first.new_file_path) is FolderRole.SUCCESS
    assert Path(first.new_file_path).exists()
    assert env["errors"].find_for_document(document.id) == []
    assert env["candidates"].find_by_id(document.id).file_path == first.new_file_path

    second = validate.handle(ValidateCorrectedDocumentCommand(document_id=document.id))
    assert not second.success
    assert second.error == "Document already in success folder."


def test_ocr_failure_leaves_file_in_success_without_record(env):
    env["ocr"].fail_on = {1}
    source = stage(env, [front_page("JOHN DOE", "0012"), "RESULTS", front_page("JANE ROE", "0013"), "RESULTS"])

    result = run(env, source)

    assert result.errors == ["[1] OCR ERROR: tesseract exited with code 1"]
    assert result.total_candidates == 1
    assert (scope_dir(env, "success") / "2024_WAEC_C001_0001.pdf").exists()
    assert [d.candidate_number for d in env["candidates"].search()] == ["0013"]
    (error,) = env["errors"].find_all()
    assert error.error_type is ErrorKind.OCR_ISSUE
    assert error.candidate_document_id is None


def test_session_out_of_range_is_reported(env):
    source = stage(env, [front_page("JOHN DOE", "0012", year=2031), "RESULTS"])

    result = run(env, source)

    assert result.errors == ["[1] Validation failed."]
    (error,) = env["errors"].find_all()
    assert error.field_name == "Session"
    assert error.session == 2031
    assert "2031" in error.error_message


def test_repeated_imports_get_unique_archive_names(env):
    names = []
    for _ in range(3):
        source = stage(env, [front_page("JOHN DOE", "0012"), "RESULTS"])
        names.append(Path(run(env, source).imported_file_path).name)

    assert names == ["upload_Tr.pdf", "upload_Tr1.pdf", "upload_Tr2.pdf"]
    # Re-imported candidates overwrite the same success artifact.
    assert len(list(scope_dir(env, "success").iterdir())) == 1


def test_malformed_source_aborts_and_keeps_staged_file(env):
    env["staging"].mkdir()
    source = env["staging"] / "broken.pdf"
    source.write_bytes(b"definitely not a pdf")

    with pytest.raises(MalformedDocumentError):
        run(env, source)

    assert source.exists()
    assert not env["root"].exists()


def test_unreadable_session_year_is_stored_as_parsed(env):
    source = stage(env, [front_page("JOHN DOE", "0012").replace("SESSION 2024", "JUNE OOOO"), "RESULTS"])

    result = run(env, source)

    assert result.errors == ["[1] Validation failed."]
    (document,) = env["candidates"].find_invalid()
    (error,) = env["errors"].find_for_document(document.id)
    assert error.field_name == "Session"
    assert document.session == error.session == 0
