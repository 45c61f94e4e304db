"""Command line entry point: ``python -m canddocs.main <command> ...``.

Every command prints a JSON document on stdout and exits non-zero when the
operation reports an error.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from pydantic import ValidationError

from canddocs.app_logging import configure_logging
from canddocs.application.commands.upload_batch import UploadBatchCommand
from canddocs.application.commands.validate_corrected_document import ValidateCorrectedDocumentCommand
from canddocs.application.queries.get_candidate import GetCandidateQuery
from canddocs.application.queries.list_candidates import ListCandidatesQuery
from canddocs.application.queries.list_import_errors import ListImportErrorsQuery
from canddocs.application.queries.search_candidates import SearchCandidatesQuery
from canddocs import dependencies
from canddocs.domain.exceptions import DomainException
from canddocs.schemas.candidate_schemas import UpdateCandidateRequest, UploadBatchRequest

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="canddocs", description="Import scanned candidate document batches.")
    sub = ap.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Import staged multi-candidate PDFs for one session/exam/centre")
    imp.add_argument("pdf", nargs="+", help="Staged PDF paths (archived and removed after import)")
    imp.add_argument("--session", type=int, required=True, help="Exam session year")
    imp.add_argument("--exam", required=True, help="Exam code")
    imp.add_argument("--centre", required=True, help="Centre number")
    imp.add_argument("--uploaded-by", default="system", help="Recorded on every import error")

    upd = sub.add_parser("update", help="Correct a candidate's fields and mark it valid")
    upd.add_argument("id", type=int)
    upd.add_argument("--name", required=True)
    upd.add_argument("--number", required=True)
    upd.add_argument("--session", type=int, required=True)
    upd.add_argument("--centre", required=True)

    val = sub.add_parser("validate", help="Move a corrected document back to success")
    val.add_argument("id", type=int)

    lst = sub.add_parser("list", help="List valid or invalid candidates")
    lst.add_argument("partition", choices=["valid", "invalid"])
    lst.add_argument("--centre", default=None, help="Only invalid candidates of this centre")
    lst.add_argument("--with-errors", action="store_true", help="Include each candidate's import errors")

    show = sub.add_parser("show", help="Show one candidate with its import errors")
    show.add_argument("id", type=int)

    find = sub.add_parser("search", help="Search candidates")
    find.add_argument("--name", default=None)
    find.add_argument("--number", default=None)
    find.add_argument("--centre", default=None)

    errs = sub.add_parser("errors", help="List import errors")
    errs.add_argument("--document", type=int, default=None)
    return ap


def run(args: argparse.Namespace) -> tuple[int, Any]:
    if args.command == "import":
        request = UploadBatchRequest(exam_year=args.session, exam_code=args.exam, centre_number=args.centre)
        dispatcher = dependencies.get_batch_dispatcher()
        futures = [
            dispatcher.submit(UploadBatchCommand(request=request, source_file_path=pdf, uploaded_by=args.uploaded_by))
            for pdf in args.pdf
        ]
        results = [future.result().to_dict() for future in futures]
        return 0, results[0] if len(results) == 1 else results

    if args.command == "update":
        request = UpdateCandidateRequest(
            id=args.id,
            candidate_name=args.name,
            candidate_number=args.number,
            session=args.session,
            centre_code=args.centre,
        )
        result = dependencies.get_update_candidate_handler().handle(request)
        return (0 if result.success else 1), result.to_dict()

    if args.command == "validate":
        result = dependencies.get_validate_corrected_document_handler().handle(
            ValidateCorrectedDocumentCommand(document_id=args.id)
        )
        return (0 if result.success else 1), result.to_dict()

    if args.command == "list":
        query = ListCandidatesQuery(
            valid=args.partition == "valid",
            centre_code=args.centre,
            include_errors=args.with_errors,
        )
        return 0, [dto.to_dict() for dto in dependencies.get_list_candidates_handler().handle(query)]

    if args.command == "show":
        return 0, dependencies.get_candidate_handler().handle(GetCandidateQuery(document_id=args.id)).to_dict()

    if args.command == "search":
        query = SearchCandidatesQuery(name=args.name, candidate_number=args.number, centre_number=args.centre)
        return 0, [dto.to_dict() for dto in dependencies.get_search_candidates_handler().handle(query)]

    query = ListImportErrorsQuery(candidate_document_id=args.document)
    return 0, [dto.to_dict() for dto in dependencies.get_list_import_errors_handler().handle(query)]


def main(argv: Optional[List[str]] = None) -> int:
    # stdout carries the JSON result.
    configure_logging(stream=sys.stderr)
    args = build_parser().parse_args(argv)
    try:
        code, payload = run(args)
    except (DomainException, FileNotFoundError, ValidationError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        code, payload = 2, {"success": False, "error": str(exc)}
    print(json.dumps(payload, indent=2, default=str))
    return code


if __name__ == "__main__":
    sys.exit(main())
