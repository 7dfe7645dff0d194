"""Skill vocabulary shared by profiles and their wanted skills."""

from enum import StrEnum


class Skill(StrEnum):
    """The fixed set of skill categories a profile can offer or look for."""

    WEB_DEVELOPMENT = "Web Development"
    GRAPHIC_DESIGN = "Graphic Design"
    CONTENT_WRITING = "Content Writing"
    DIGITAL_MARKETING = "Digital Marketing"
    UI_UX_DESIGN = "UI/UX Design"
    MOBILE_DEVELOPMENT = "Mobile Development"
    DATA_ANALYSIS = "Data Analysis"
    VIDEO_EDITING = "Video Editing"
    SOCIAL_MEDIA_MANAGEMENT = "Social Media Management"
    SEO_OPTIMIZATION = "SEO Optimization"


SKILL_VALUES: tuple[str, ...] = tuple(skill.value for skill in Skill)


def is_valid_skill(value: object) -> bool:
    """Check whether a value belongs to the skill vocabulary."""
    return isinstance(value, str) and value in SKILL_VALUES
