"""Domain layer - document records, their schemas and validation.

No dependencies on the search backend or HTTP clients live here:
- Author: the CPAN author record with its field table (AUTHOR_SCHEMA)
- Favorite: read-only projection of a user's favorited distribution
- validate: field-level checks against a schema
"""

from cpanmeta.domain.author import AUTHOR_SCHEMA, Author
from cpanmeta.domain.favorite import Favorite
from cpanmeta.domain.validation import Violation, validate


__all__ = [
    "AUTHOR_SCHEMA",
    "Author",
    "Favorite",
    "Violation",
    "validate",
]
