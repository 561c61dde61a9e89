"""
Matching Context

Responsibilities:
- Extracts keyword tokens from template and content file names
- Classifies templates into structural categories
- Scores content files against templates and selects the best template
- Assigns ordinal output positions to content files

Owns: Keyword lists, synonym groups, scoring weights
Never: Opens, duplicates or fills documents
"""

from bookcreator.contexts.matching.descriptive_matcher import find_matching_content
from bookcreator.contexts.matching.keywords import TemplateCategory, classify, extract_keywords
from bookcreator.contexts.matching.template_matcher import (
    ContentFile,
    MatchPlan,
    TemplateDescriptor,
    TemplateMatch,
    assign_ordinals,
    build_match_plan,
    describe_template,
    score,
    select_best_template,
)

__all__ = [
    # Keywords and categories
    "TemplateCategory",
    "extract_keywords",
    "classify",
    # Template selection
    "TemplateDescriptor",
    "ContentFile",
    "TemplateMatch",
    "MatchPlan",
    "describe_template",
    "score",
    "select_best_template",
    "assign_ordinals",
    "build_match_plan",
    # Descriptive-name pairing
    "find_matching_content",
]
