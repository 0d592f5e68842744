from app.services.assessment import assign_level, evaluate_assessment, generate_assessment, generate_technologies
from app.services.generative import GenerationError, GenerativeClient, ParseError
from app.services.oauth import OAuthClient, UpstreamProviderError
from app.services.profiles import merge_profile, validate_developer_info, validate_recruiter_info
from app.services.reputation import calculate_reputation_score, fallback_reputation_score, normalize_linkedin_data
from app.services.search import SearchFilters, find_by_public_name, public_view, search_profiles

__all__ = [
    "assign_level",
    "evaluate_assessment",
    "generate_assessment",
    "generate_technologies",
    "GenerationError",
    "GenerativeClient",
    "ParseError",
    "OAuthClient",
    "UpstreamProviderError",
    "merge_profile",
    "validate_developer_info",
    "validate_recruiter_info",
    "calculate_reputation_score",
    "fallback_reputation_score",
    "normalize_linkedin_data",
    "SearchFilters",
    "find_by_public_name",
    "public_view",
    "search_profiles",
]
