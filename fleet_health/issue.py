"""Issue dataclass for detected vehicle problems."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .status import Severity


@dataclass
class Issue:
    """A single problem raised by one of the detectors."""

    severity: Severity
    text: str
    source: str
    item_key: Optional[str] = None

    @property
    def is_critical(self) -> bool:
        return self.severity == Severity.CRITICAL

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"severity": self.severity.label, "text": self.text}
        if self.item_key is not None:
            d["itemKey"] = self.item_key
        return d
