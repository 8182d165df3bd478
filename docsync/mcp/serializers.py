"""Model serialization for MCP and HTTP responses."""

from dataclasses import asdict, is_dataclass
from typing import Any

from pydantic import BaseModel


def serialize_model(obj: Any) -> Any:
    """
    Serialize a model to JSON-compatible data.

    Args:
        obj: Pydantic model, dataclass, or list of either

    Returns:
        Dictionary (or list of dictionaries) with datetimes as ISO strings
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if is_dataclass(obj) and not isinstance(obj, type):
        return {key: serialize_model(value) for key, value in asdict(obj).items()}
    if isinstance(obj, list):
        return [serialize_model(item) for item in obj]
    if hasattr(obj, "isoformat"):  # datetime
        return obj.isoformat()
    return obj


def serialize_sync_result(result: Any) -> dict[str, Any]:
    """Serialize a SyncResult; entries keep their model form."""
    return {
        "documents": [serialize_model(e) for e in result.entries],
        "added": list(result.added),
        "removed": list(result.removed),
    }
