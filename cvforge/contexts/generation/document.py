"""
Structured Document Data Structures

Defines the tailored CV produced by the model: identity fields, a summary and an
ordered list of free-text sections. Also defines the JSON schema handed to the
model, which must stay in lockstep with StructuredDocument.from_dict().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from cvforge.contexts.generation.exceptions import InvalidOutputError

# Wire name -> attribute name, in schema order
IDENTITY_FIELDS = {
    "fullName": "full_name",
    "title": "title",
    "email": "email",
    "phone": "phone",
    "location": "location",
    "summary": "summary",
}

SECTION_FIELDS = ("heading", "content")


@dataclass(frozen=True)
class Section:
    """
    One labeled section of the CV (e.g., Experience, Education, Skills).

    Attributes:
        heading: Section heading as written by the model (upper-cased at layout time)
        content: Free text; embedded newlines are hard line breaks
    """

    heading: str
    content: str


@dataclass(frozen=True)
class StructuredDocument:
    """
    A complete, validated tailored CV.

    Any field except sections may be an empty string, meaning the information
    was not present in the original resume.
    """

    full_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""
    sections: Tuple[Section, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Any) -> "StructuredDocument":
        """
        Validate a decoded JSON value and build a document from it.

        Every identity field must be present and a string (empty allowed),
        sections must be a list of objects with string heading and content.
        Unknown extra keys are ignored.

        Raises:
            InvalidOutputError: On the first deviation, with its JSON path
        """
        if not isinstance(data, dict):
            raise InvalidOutputError(f"Expected a JSON object, got {_json_type(data)}")

        values = {}
        for wire_name, attr_name in IDENTITY_FIELDS.items():
            values[attr_name] = _require_string(data, wire_name, path=wire_name)

        if "sections" not in data:
            raise InvalidOutputError("Missing required field", path="sections")
        raw_sections = data["sections"]
        if not isinstance(raw_sections, list):
            raise InvalidOutputError(
                f"Expected an array, got {_json_type(raw_sections)}", path="sections"
            )

        sections = []
        for i, raw_section in enumerate(raw_sections):
            path = f"sections[{i}]"
            if not isinstance(raw_section, dict):
                raise InvalidOutputError(
                    f"Expected an object, got {_json_type(raw_section)}", path=path
                )
            sections.append(
                Section(
                    heading=_require_string(raw_section, "heading", path=f"{path}.heading"),
                    content=_require_string(raw_section, "content", path=f"{path}.content"),
                )
            )

        return cls(sections=tuple(sections), **values)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire (camelCase) form, as the model produces it."""
        data = {wire: getattr(self, attr) for wire, attr in IDENTITY_FIELDS.items()}
        data["sections"] = [
            {"heading": section.heading, "content": section.content} for section in self.sections
        ]
        return data


def _require_string(data: Dict[str, Any], key: str, path: str) -> str:
    if key not in data:
        raise InvalidOutputError("Missing required field", path=path)
    value = data[key]
    if not isinstance(value, str):
        raise InvalidOutputError(f"Expected a string, got {_json_type(value)}", path=path)
    return value


def _json_type(value: Any) -> str:
    """Name a decoded JSON value's type the way JSON does."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


# Schema descriptor for the model invocation. Strict structured-output modes
# require every property listed in "required" and no additional properties.
DOCUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "fullName": {"type": "string", "description": "The full name of the candidate"},
        "title": {
            "type": "string",
            "description": "A professional title tailored to the job offer",
        },
        "email": {"type": "string", "description": "Email address from the original CV"},
        "phone": {"type": "string", "description": "Phone number from the original CV"},
        "location": {"type": "string", "description": "Location from the original CV"},
        "summary": {
            "type": "string",
            "description": (
                "A compelling professional summary tailored to the job offer, 2-4 sentences"
            ),
        },
        "sections": {
            "type": "array",
            "description": (
                "CV sections in order: Experience, Education, Skills, "
                "and any other relevant sections"
            ),
            "items": {
                "type": "object",
                "properties": {
                    "heading": {
                        "type": "string",
                        "description": "Section heading like Experience, Education, Skills, etc.",
                    },
                    "content": {
                        "type": "string",
                        "description": "Section content with details tailored to the job offer",
                    },
                },
                "required": list(SECTION_FIELDS),
                "additionalProperties": False,
            },
        },
    },
    "required": [*IDENTITY_FIELDS, "sections"],
    "additionalProperties": False,
}
