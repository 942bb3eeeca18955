#!/usr/bin/env python3
"""
Compatibility Models - rubric score rows and compatibility results.

Rubric score metadata is a tagged variant chosen by subcategory kind:

- choice: categorical attributes carrying a raw ``value`` (learning_style, mentorship_type)
- source: analysed skills/platforms carrying their provenance
- empty: numeric-only attributes (collaboration_preference)
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError


class ScoreCategory(str, Enum):
    TECHNICAL_SKILLS = "technical_skills"
    SOCIAL_BLUEPRINT = "social_blueprint"
    PERSONAL_ATTRIBUTES = "personal_attributes"


# Subcategories with special meaning to the engine
LEARNING_STYLE = "learning_style"
COLLABORATION_PREFERENCE = "collaboration_preference"
MENTORSHIP_TYPE = "mentorship_type"

CHOICE_SUBCATEGORIES = frozenset({LEARNING_STYLE, MENTORSHIP_TYPE})
NUMERIC_SUBCATEGORIES = frozenset({COLLABORATION_PREFERENCE})


class ChoiceMetadata(BaseModel):
    kind: Literal["choice"] = "choice"
    value: Optional[str] = None


class SourceMetadata(BaseModel):
    kind: Literal["source"] = "source"
    source: Optional[str] = None
    count: Optional[int] = None


class EmptyMetadata(BaseModel):
    kind: Literal["empty"] = "empty"


ScoreMetadata = Annotated[
    Union[ChoiceMetadata, SourceMetadata, EmptyMetadata],
    Field(discriminator="kind")
]


def metadata_kind_for(subcategory: str) -> str:
    if subcategory in CHOICE_SUBCATEGORIES:
        return "choice"
    if subcategory in NUMERIC_SUBCATEGORIES:
        return "empty"
    return "source"


_METADATA_ADAPTER = TypeAdapter(ScoreMetadata)


def parse_metadata(subcategory: str, raw: Optional[Dict[str, Any]]) -> Union[ChoiceMetadata, SourceMetadata, EmptyMetadata]:
    """
    Parse a metadata dict into the variant its subcategory calls for.

    Rows written before variants existed have no ``kind``; those are
    classified from the subcategory. An explicit ``kind`` must agree with
    that classification.

    Raises:
        ValidationError: unknown or mismatched ``kind``, or malformed fields
    """
    raw = dict(raw or {})
    expected = metadata_kind_for(subcategory)
    kind = raw.get("kind") or expected
    raw["kind"] = kind

    if kind != expected:
        raise ValidationError(
            f"Metadata kind '{kind}' does not apply to subcategory '{subcategory}'",
            details={"subcategory": subcategory, "kind": kind, "expected_kind": expected}
        )

    try:
        return _METADATA_ADAPTER.validate_python(raw)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid metadata for subcategory '{subcategory}'",
            details={
                "subcategory": subcategory,
                "errors": [
                    {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
                    for error in e.errors()
                ],
            }
        ) from e


class RubricScoreEntry(BaseModel):
    """A single (category, subcategory) rating for one user."""
    user_id: Optional[str] = None
    category: ScoreCategory
    subcategory: str = Field(min_length=1)
    score: int = Field(ge=0, le=5)
    metadata: ScoreMetadata = Field(default_factory=SourceMetadata)

    @property
    def choice_value(self) -> Optional[str]:
        if isinstance(self.metadata, ChoiceMetadata):
            return self.metadata.value
        return None


def round_half_up(value: float) -> int:
    """Round .5 fractions toward +infinity."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


@dataclass
class ComponentScore:
    """Score for one compatibility component (technical, social or personal)."""
    score: int
    similarity: Optional[int] = None
    complementarity: Optional[int] = None
    reason: Optional[str] = None
    details: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"score": self.score}
        if self.similarity is not None:
            data["similarity"] = self.similarity
        if self.complementarity is not None:
            data["complementarity"] = self.complementarity
        if self.reason is not None:
            data["reason"] = self.reason
        data["details"] = {k: dict(v) for k, v in self.details.items()}
        return data


@dataclass
class CompatibilityResult:
    """Weighted compatibility between two users."""
    overall: int
    technical: ComponentScore
    social: ComponentScore
    personal: ComponentScore

    @property
    def components(self) -> Dict[str, ComponentScore]:
        return {
            "technical": self.technical,
            "social": self.social,
            "personal": self.personal,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot suitable for a JSON match_details field."""
        return {
            "overall": self.overall,
            "components": {name: c.to_dict() for name, c in self.components.items()},
        }
