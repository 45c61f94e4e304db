"""Domain entities package"""

from .candidate_document import CandidateDocument
from .import_error_record import ImportErrorRecord

__all__ = ["CandidateDocument", "ImportErrorRecord"]
