"""
geometry/validator.py - Hull geometry validation gate

Every check runs and reports independently so a caller sees all problems in
one pass. Downstream integrators assume a geometry that passed here.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
import logging
import math

from hydrocore.core.constants import MIN_STATIONS, MIN_WATERLINES, MAX_LPP_M
from hydrocore.errors import ErrorCode, GeometryValidationError
from hydrocore.geometry.model import HullGeometry, PrincipalDimensions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    """One locatable geometry problem."""

    code: ErrorCode
    field: str
    message: str
    station_index: Optional[int] = None
    waterline_index: Optional[int] = None
    row: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "field": self.field,
            "message": self.message,
            "station_index": self.station_index,
            "waterline_index": self.waterline_index,
            "row": self.row,
        }


class GeometryValidator:
    """Structural and numeric checks on a HullGeometry snapshot."""

    def validate(self, geometry: HullGeometry) -> List[ValidationIssue]:
        """
        Check a geometry.

        Returns:
            Every issue found; empty iff the geometry is usable.
        """
        issues: List[ValidationIssue] = []
        issues.extend(self._check_axis(
            "stations", [(s.index, s.x) for s in geometry.stations],
            MIN_STATIONS, ErrorCode.VAL_TOO_FEW_STATIONS,
        ))
        issues.extend(self._check_axis(
            "waterlines", [(w.index, w.z) for w in geometry.waterlines],
            MIN_WATERLINES, ErrorCode.VAL_TOO_FEW_WATERLINES,
        ))
        issues.extend(self._check_baseline(geometry))
        issues.extend(self._check_offsets(geometry))

        if issues:
            logger.debug(f"Geometry '{geometry.name}' failed validation with {len(issues)} issue(s)")
        return issues

    def is_valid(self, geometry: HullGeometry) -> bool:
        return not self.validate(geometry)

    # ===== AXES =====

    def _check_axis(
        self,
        name: str,
        entries: Sequence[tuple],
        minimum: int,
        count_code: ErrorCode,
    ) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        coord = "x" if name == "stations" else "z"
        index_field = "station_index" if name == "stations" else "waterline_index"

        if len(entries) < minimum:
            issues.append(ValidationIssue(
                code=count_code,
                field=name,
                message=f"At least {minimum} {name} are required, got {len(entries)}",
            ))

        seen: Dict[int, int] = {}
        for row, (index, value) in enumerate(entries):
            if index in seen:
                issues.append(ValidationIssue(
                    code=ErrorCode.VAL_DUPLICATE_INDEX,
                    field=name,
                    message=f"Duplicate {name[:-1]} index {index} (rows {seen[index]} and {row})",
                    row=row,
                    **{index_field: index},
                ))
            else:
                seen[index] = row

            if not math.isfinite(value):
                issues.append(ValidationIssue(
                    code=ErrorCode.VAL_NON_FINITE,
                    field=f"{name}.{coord}",
                    message=f"{name[:-1].capitalize()} {index} has non-finite {coord}: {value}",
                    row=row,
                    **{index_field: index},
                ))

        for row in range(1, len(entries)):
            prev_value = entries[row - 1][1]
            value = entries[row][1]
            if math.isfinite(prev_value) and math.isfinite(value) and not value > prev_value:
                issues.append(ValidationIssue(
                    code=ErrorCode.VAL_NON_MONOTONIC,
                    field=f"{name}.{coord}",
                    message=(
                        f"{name.capitalize()} must be strictly increasing in {coord}: "
                        f"{coord}={value} at row {row} follows {coord}={prev_value}"
                    ),
                    row=row,
                    **{index_field: entries[row][0]},
                ))

        return issues

    def _check_baseline(self, geometry: HullGeometry) -> List[ValidationIssue]:
        finite = [w.z for w in geometry.waterlines if math.isfinite(w.z)]
        if finite and min(finite) > 0.0:
            return [ValidationIssue(
                code=ErrorCode.VAL_NO_BASELINE,
                field="waterlines.z",
                message=f"Waterlines must include z=0 or below; lowest is z={min(finite)}",
            )]
        return []

    # ===== OFFSETS =====

    def _check_offsets(self, geometry: HullGeometry) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        station_ids = {s.index for s in geometry.stations}
        waterline_ids = {w.index for w in geometry.waterlines}

        for row, ((station_index, waterline_index), y) in enumerate(geometry.offsets.items()):
            if station_index not in station_ids or waterline_index not in waterline_ids:
                issues.append(ValidationIssue(
                    code=ErrorCode.VAL_UNKNOWN_REFERENCE,
                    field="offsets",
                    message=(
                        f"Offset references unknown station/waterline "
                        f"({station_index}, {waterline_index})"
                    ),
                    station_index=station_index,
                    waterline_index=waterline_index,
                    row=row,
                ))
            if not math.isfinite(y):
                issues.append(ValidationIssue(
                    code=ErrorCode.VAL_NON_FINITE,
                    field="offsets.y",
                    message=(
                        f"Non-finite half-breadth {y} at station {station_index}, "
                        f"waterline {waterline_index}"
                    ),
                    station_index=station_index,
                    waterline_index=waterline_index,
                    row=row,
                ))
            elif y < 0.0:
                issues.append(ValidationIssue(
                    code=ErrorCode.VAL_NEGATIVE_OFFSET,
                    field="offsets.y",
                    message=(
                        f"Negative half-breadth {y} at station {station_index}, "
                        f"waterline {waterline_index}"
                    ),
                    station_index=station_index,
                    waterline_index=waterline_index,
                    row=row,
                ))

        # Dense grid: one issue per missing cell
        reported = set()
        for station in geometry.stations:
            for waterline in geometry.waterlines:
                key = (station.index, waterline.index)
                if key in geometry.offsets or key in reported:
                    continue
                reported.add(key)
                issues.append(ValidationIssue(
                    code=ErrorCode.VAL_MISSING_OFFSET,
                    field="offsets",
                    message=(
                        f"Missing offset at station {station.index}, "
                        f"waterline {waterline.index}"
                    ),
                    station_index=station.index,
                    waterline_index=waterline.index,
                ))

        return issues


def validate_dimensions(dimensions: PrincipalDimensions) -> List[ValidationIssue]:
    """Sanity checks on principal dimensions."""
    issues: List[ValidationIssue] = []

    def _issue(field_name: str, message: str) -> None:
        issues.append(ValidationIssue(
            code=ErrorCode.VAL_DIMENSIONS, field=field_name, message=message,
        ))

    lpp, beam, draft = dimensions.lpp, dimensions.beam, dimensions.design_draft

    if not lpp > 0:
        _issue("lpp", f"Lpp must be positive: {lpp}")
    elif lpp > MAX_LPP_M:
        _issue("lpp", f"Lpp {lpp} m exceeds the {MAX_LPP_M} m limit")
    if not beam > 0:
        _issue("beam", f"Beam must be positive: {beam}")
    elif lpp > 0 and beam > lpp:
        _issue("beam", f"Beam {beam} m cannot exceed Lpp {lpp} m")
    if draft is not None:
        if not draft > 0:
            _issue("design_draft", f"Design draft must be positive: {draft}")
        elif beam > 0 and draft > beam:
            _issue("design_draft", f"Design draft {draft} m cannot exceed beam {beam} m")

    return issues


_default_validator = GeometryValidator()


def require_valid(geometry: HullGeometry, source: str = "geometry_validator") -> HullGeometry:
    """
    Gate for engine entry points.

    Raises:
        GeometryValidationError: carrying every issue found
    """
    issues = _default_validator.validate(geometry)
    if issues:
        raise GeometryValidationError(issues, source=source)
    return geometry
