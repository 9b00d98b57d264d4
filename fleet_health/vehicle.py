"""Vehicle class for fleet registry identification."""

from typing import Optional


class Vehicle:
    """A fleet vehicle as supplied by the registry. Read-only to the engine."""

    def __init__(
        self,
        id: str,
        code: str,
        brand: Optional[str] = None,
        model: Optional[str] = None,
        active: bool = True,
    ):
        self.id = id
        self.code = code
        self.brand = brand
        self.model = model
        self.active = True if active is None else bool(active)

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        parts = [p for p in (self.brand, self.model) if p]
        if parts:
            return f"{self.code} ({' '.join(parts)})"
        return self.code
