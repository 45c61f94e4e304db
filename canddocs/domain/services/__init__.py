"""
Domain services for business logic that doesn't belong to a specific entity.

- Page pairing: groups split pages into per-candidate pairs
- Document validation: field-level checks on OCR-derived candidate data
"""
