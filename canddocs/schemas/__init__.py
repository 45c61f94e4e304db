from .candidate_schemas import UpdateCandidateRequest, UploadBatchRequest

__all__ = ["UpdateCandidateRequest", "UploadBatchRequest"]
