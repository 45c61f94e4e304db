"""CLI commands wired through the real dependency factories."""
from __future__ import annotations

import json
import logging

import fitz  # type: ignore
import pytest

from canddocs import dependencies, main
from canddocs.config import get_settings


class TextLayerOcr:
    def extract_text_from_pdf(self, pdf_bytes: bytes, page_number: int = 1) -> str:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
            return document.load_page(page_number - 1).get_text().upper()


def _clear_caches():
    get_settings.cache_clear()
    for name in dir(dependencies):
        factory = getattr(dependencies, name)
        if hasattr(factory, "cache_clear"):
            factory.cache_clear()


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_ROOT", str(tmp_path / "Storage"))
    monkeypatch.setenv("CANDDOCS_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FILE_RETRY_DELAY_MS", "0")
    monkeypatch.setattr(dependencies, "get_ocr_service", lambda: TextLayerOcr())
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    _clear_caches()
    yield tmp_path
    _clear_caches()
    root.handlers[:] = handlers
    root.setLevel(level)


def invoke(capsys, *argv):
    code = main.main(list(argv))
    return code, json.loads(capsys.readouterr().out)


def staged_batch(tmp_path, number):
    document = fitz.open()
    front = document.new_page()
    for offset, line in enumerate(
        ["CANDIDATE NAME JOHN DOE", f"CANDIDATE NUMBER {number}", "CENTRE NUMBER C001", "SESSION 2024"]
    ):
        front.insert_text((72, 72 + 20 * offset), line)
    document.new_page().insert_text((72, 72), "RESULTS")
    path = tmp_path / "batch.pdf"
    path.write_bytes(document.tobytes())
    document.close()
    return path


def test_import_fix_and_validate(cli_env, capsys):
    source = staged_batch(cli_env, "12A3")

    code, summary = invoke(capsys, "import", str(source), "--session", "2024", "--exam", "WAEC", "--centre", "C001")
    assert code == 0
    assert summary["errors"] == ["[1] Validation failed."]
    assert summary["imported_file_path"].endswith("batch_Tr.pdf")

    code, invalid = invoke(capsys, "list", "invalid", "--with-errors")
    assert [c["candidate_number"] for c in invalid] == ["12A3"]
    assert invalid[0]["errors"][0]["field_name"] == "CandidateNumber"
    document_id = invalid[0]["id"]

    code, result = invoke(
        capsys, "update", str(document_id), "--name", "JOHN DOE", "--number", "1203", "--session", "2024",
        "--centre", "C001",
    )
    assert code == 0 and result["success"]

    code, result = invoke(capsys, "validate", str(document_id))
    assert code == 0
    assert "/success/" in result["new_file_path"]

    code, result = invoke(capsys, "validate", str(document_id))
    assert code == 1
    assert result["error"] == "Document already in success folder."

    code, errors = invoke(capsys, "errors")
    assert errors == []


def test_show_unknown_candidate_fails(cli_env, capsys):
    code, result = invoke(capsys, "show", "404")
    assert code == 2
    assert result["success"] is False


def test_update_unknown_candidate(cli_env, capsys):
    code, result = invoke(
        capsys, "update", "9", "--name", "X", "--number", "1", "--session", "2024", "--centre", "C1"
    )
    assert code == 1
    assert result["error"] == "Candidate not found."


def test_import_several_batches(cli_env, capsys):
    first = staged_batch(cli_env, "0012")
    second = first.with_name("second.pdf")
    first.rename(second)
    first = staged_batch(cli_env, "0013")

    code, summaries = invoke(
        capsys, "import", str(first), str(second), "--session", "2024", "--exam", "WAEC", "--centre", "C001"
    )

    assert code == 0
    assert [s["total_candidates"] for s in summaries] == [1, 1]
    assert not first.exists() and not second.exists()
    code, valid = invoke(capsys, "list", "valid")
    assert sorted(c["candidate_number"] for c in valid) == ["0012", "0013"]
