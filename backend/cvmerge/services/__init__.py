from .errors import (
    MergeError,
    UpstreamExtractionError,
    CandidateNotFoundError,
    MergeTransactionError,
    MergeTimeoutError
)
from .normalizer import (
    SKILL_SYNONYMS,
    normalize_key,
    normalize_skill_name,
    skill_name_variants
)
from .duplicates import (
    MATCH_RULES,
    DuplicateResolver,
    MatchRule,
    Resolution,
    resolver_for
)
from .basic_info import (
    BASIC_INFO_FIELDS,
    BasicInfoFill,
    resolve_basic_info_fill,
    calculate_years_of_experience,
    with_derived_experience
)
from .extraction import (
    CVExtractor,
    extract_profile,
    parse_extracted_profile,
    strip_json_fence
)
from .store import ProfileStore
from .results import MergeResultAggregator
from .merge import ProfileMergeService

__all__ = [
    # Errors
    "MergeError",
    "UpstreamExtractionError",
    "CandidateNotFoundError",
    "MergeTransactionError",
    "MergeTimeoutError",
    # Normalization
    "SKILL_SYNONYMS",
    "normalize_key",
    "normalize_skill_name",
    "skill_name_variants",
    # Duplicate detection
    "MATCH_RULES",
    "DuplicateResolver",
    "MatchRule",
    "Resolution",
    "resolver_for",
    # Basic info
    "BASIC_INFO_FIELDS",
    "BasicInfoFill",
    "resolve_basic_info_fill",
    "calculate_years_of_experience",
    "with_derived_experience",
    # Extraction boundary
    "CVExtractor",
    "extract_profile",
    "parse_extracted_profile",
    "strip_json_fence",
    # Merge
    "ProfileStore",
    "MergeResultAggregator",
    "ProfileMergeService"
]
