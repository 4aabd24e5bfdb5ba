from typing import Any, Dict, List

from j2c.errors import J2CError


class ValidationResult:
    """Container for validation results."""

    def __init__(self, source: str):
        self.source = source
        self.errors: List[J2CError] = []
        self.warnings: List[str] = []
        self.stats: Dict[str, Any] = {}
        self.is_valid = True

    def add_error(self, error: J2CError):
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning. Warnings never change validity."""
        self.warnings.append(warning)

    @property
    def exit_code(self) -> int:
        if self.is_valid:
            return 0
        return max(e.exit_code for e in self.errors)

    def summary(self) -> str:
        if self.is_valid:
            return f"{self.source}: VALID ({len(self.warnings)} warnings)"
        return f"{self.source}: {len(self.errors)} errors, {len(self.warnings)} warnings"
