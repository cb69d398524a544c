"""Pipeline input support flags for cmdlet parameters."""

from enum import IntFlag


class PipelineInputType(IntFlag):
    """Ways a parameter can take its value from the pipeline."""

    NONE = 0
    BY_VALUE = 1
    BY_PROPERTY_NAME = 2
    FROM_REMAINING_ARGUMENTS = 4


# The MAML vocabulary is a closed set of literals, not a generic flag listing.
_LITERALS: dict[int, str] = {
    0: "false",
    1: "true (ByValue)",
    2: "true (ByPropertyName)",
    3: "true (ByPropertyName, ByValue)",
    4: "true (FromRemainingArguments)",
    5: "true (ByValue, FromRemainingArguments)",
    6: "true (ByPropertyName, FromRemainingArguments)",
    7: "true (ByPropertyName, ByValue, FromRemainingArguments)",
}


def to_literal(value: PipelineInputType) -> str:
    """Render pipeline input flags as their MAML attribute value.

    Example:
        >>> to_literal(PipelineInputType.BY_VALUE | PipelineInputType.BY_PROPERTY_NAME)
        'true (ByPropertyName, ByValue)'
    """
    return _LITERALS[int(value)]
