# src/editorprefs/keybindings/models.py — v1
"""Key-binding domain models: ConfigurationDocument, KeyBindingBaseline, SyncOutcome.

A ConfigurationDocument maps keystroke strings to action names. A ``None``
value is an explicit unbind and differs from the key being absent.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

ConfigurationDocument = dict[str, Optional[str]]

_DOCUMENT_ADAPTER: TypeAdapter[ConfigurationDocument] = TypeAdapter(
    ConfigurationDocument
)


def validate_document(data: Any) -> ConfigurationDocument:
    """Validate untrusted data as a flat ConfigurationDocument.

    Raises:
        pydantic.ValidationError: If data is not a str -> str|None mapping.
    """
    return _DOCUMENT_ADAPTER.validate_python(data, strict=True)


class KeyBindingBaseline(BaseModel):
    """Built-in bindings captured before any user override is applied."""

    model_config = ConfigDict(frozen=True)

    keybindings: ConfigurationDocument
    unbound_names: tuple[str, ...] = ()
    captured_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class SyncOutcome(BaseModel):
    """Result of one coordinator operation; ``ok=False`` is a rejected outcome."""

    operation: Literal["install", "persist"]
    config_name: str
    ok: bool
    document: ConfigurationDocument = Field(default_factory=dict)
    error: str | None = None
