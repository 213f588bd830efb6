from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from inventory.config.schemas import Asset, ReferenceNames


@dataclass
class ValidationReport:
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class RuntimeValidator:
    @staticmethod
    def validate_references(assets: list[Asset], references: ReferenceNames) -> ValidationReport:
        """Report assets pointing at names missing from the reference tables.

        Assets only reference models, locations, types and statuses by name, so
        dangling names are warnings. Duplicate ids are errors.
        """
        report = ValidationReport()

        duplicates = [asset_id for asset_id, seen in Counter(a.id for a in assets).items() if seen > 1]
        for asset_id in duplicates:
            report.errors.append(f"Duplicate asset id: {asset_id}")

        checks = (
            ("model", "model", set(references.models)),
            ("office location", "office_location", set(references.locations)),
            ("asset type", "asset_type", set(references.types)),
            ("status", "status", set(references.statuses)),
        )
        for asset in assets:
            for label, attribute, known in checks:
                value = getattr(asset, attribute)
                if value not in known:
                    report.warnings.append(f"Asset {asset.id} references unknown {label} '{value}'")

        return report
