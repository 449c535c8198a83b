from __future__ import annotations

from collections import Counter
from typing import Any, List, Mapping, Optional, Union

from palletload import config, schemas
from palletload.logger import logger
from palletload.model.entities import (
    DEFAULT_MAX_PAYLOAD,
    DEFAULT_MAX_STACK_HEIGHT,
    MAX_BOX_TYPES,
    NEAR_CAPACITY_RATIO,
    BoxType,
    Pallet,
    PlacedBox,
    default_color,
    get_pallet_spec,
)
from palletload.model.metrics import (
    compute_center_of_gravity,
    compute_load_metrics,
    compute_utilization,
)
from palletload.model.pallet_packer import (
    STOP_EXHAUSTED,
    STOP_PLACEMENT_BUDGET,
    PackingOutcome,
    PalletPacker,
)

NO_BOXES_WARNING = "No boxes provided"
TOO_MANY_TYPES_WARNING = (
    f"Maximum {MAX_BOX_TYPES} box types supported, extra types ignored"
)
OFF_CENTER_WARNING = "Center of gravity is off-center, load may be unstable"
NEAR_CAPACITY_WARNING = "Load is near maximum payload capacity"
DEGENERATE_PALLET_WARNING = (
    "Pallet dimensions or payload are not positive, no boxes can be placed"
)


def prepare_pallet(request: schemas.PalletLoadRequest) -> Pallet:
    spec = get_pallet_spec(
        request.pallet_standard, request.custom_length, request.custom_width
    )
    return Pallet(
        name=spec.name,
        length=spec.length,
        width=spec.width,
        max_height=request.max_stack_height or DEFAULT_MAX_STACK_HEIGHT,
        max_payload=request.max_payload or DEFAULT_MAX_PAYLOAD,
    )


def prepare_box_types(boxes: List[schemas.BoxTypeInput]) -> List[BoxType]:
    """Convert validated inputs to engine box types, filling in palette colors."""
    duplicates = [box_id for box_id, n in Counter(b.id for b in boxes).items() if n > 1]
    if duplicates:
        logger.warning(f"duplicate box type ids in request: {duplicates}")

    return [
        BoxType(
            id=box.id,
            length=box.length,
            width=box.width,
            height=box.height,
            weight=box.weight,
            quantity=box.quantity,
            rotation=box.can_rotate,
            color=box.color or default_color(idx),
        )
        for idx, box in enumerate(boxes)
    ]


def _placed_response(box: PlacedBox) -> schemas.PlacedBoxResponse:
    return schemas.PlacedBoxResponse(
        box_type_id=box.box_type_id,
        position=schemas.Position(x=box.x, y=box.y, z=box.z),
        dimensions=schemas.Dimensions(l=box.l, w=box.w, h=box.h),
        rotation_id=box.rotation_id,
        color=box.color,
        weight=box.weight,
    )


def _budget_warning(outcome: PackingOutcome) -> str:
    budget = "placement" if outcome.stop_reason == STOP_PLACEMENT_BUDGET else "time"
    return (
        f"Packing stopped early: {budget} budget exhausted after "
        f"{len(outcome.placed)} boxes, result is partial"
    )


def build_result(
    outcome: PackingOutcome, pallet: Pallet, warnings: List[str]
) -> schemas.PalletLoadResult:
    utilization = compute_utilization(outcome.placed, pallet)
    cg = compute_center_of_gravity(outcome.placed, pallet)
    metrics = compute_load_metrics(outcome.placed, pallet, outcome.total_weight)

    warnings = list(warnings)
    if outcome.stop_reason != STOP_EXHAUSTED:
        warnings.append(_budget_warning(outcome))
    if outcome.unplaced:
        warnings.append(f"{outcome.unplaced_total} boxes could not be placed")
    if not cg.is_balanced:
        warnings.append(OFF_CENTER_WARNING)
    if pallet.max_payload > 0 and outcome.total_weight > pallet.max_payload * NEAR_CAPACITY_RATIO:
        warnings.append(NEAR_CAPACITY_WARNING)

    return schemas.PalletLoadResult(
        placed=[_placed_response(box) for box in outcome.placed],
        unplaced=[
            schemas.UnplacedResponse(box_type_id=u.box_type_id, count=u.count)
            for u in outcome.unplaced
        ],
        utilization=schemas.UtilizationResponse(
            volume_percent=utilization.volume_percent,
            weight_percent=utilization.weight_percent,
            floor_percent=utilization.floor_percent,
        ),
        center_of_gravity=schemas.CenterOfGravityResponse(
            x=cg.x, y=cg.y, z=cg.z, is_balanced=cg.is_balanced
        ),
        metrics=schemas.MetricsResponse(
            total_weight=metrics.total_weight,
            total_boxes=metrics.total_boxes,
            total_layers=metrics.total_layers,
            max_height=metrics.max_height,
            wasted_volume=metrics.wasted_volume,
        ),
        pallet_dimensions=schemas.PalletDimensions(
            length=pallet.length, width=pallet.width, height=pallet.max_height
        ),
        warnings=warnings,
    )


def log_solution_summary(result: schemas.PalletLoadResult) -> None:
    metrics = result.metrics
    logger.info(
        f"pallet load: {metrics.total_boxes} boxes, {metrics.total_layers} layers, "
        f"{metrics.total_weight:,.2f} kg, volume {result.utilization.volume_percent:.1f}%, "
        f"unplaced {sum(u.count for u in result.unplaced)}"
    )
    for warning in result.warnings:
        logger.info(f"pallet load warning: {warning}")


def calculate_pallet_load(
    request: Union[schemas.PalletLoadRequest, Mapping[str, Any]],
    max_placements: Optional[int] = None,
    time_limit: Optional[float] = None,
) -> schemas.PalletLoadResult:
    """
    Pack the requested box types onto one pallet.

    Args:
        request: A validated request or a plain mapping using the request's
            camelCase (or snake_case) field names.
        max_placements: Stop after this many boxes; defaults to the
            configured budget, unbounded when none is configured.
        time_limit: Wall-clock budget in seconds, same defaulting.

    Returns:
        The placement with utilization, center of gravity, metrics and
        warnings. Budget exhaustion yields a partial result and a warning.
    """
    if not isinstance(request, schemas.PalletLoadRequest):
        request = schemas.PalletLoadRequest.model_validate(request)

    if not request.boxes:
        logger.info("pallet load request without boxes")
        return schemas.PalletLoadResult(warnings=[NO_BOXES_WARNING])

    warnings: List[str] = []
    boxes = request.boxes
    if len(boxes) > MAX_BOX_TYPES:
        logger.warning(
            f"{len(boxes)} box types requested, only the first {MAX_BOX_TYPES} are used"
        )
        warnings.append(TOO_MANY_TYPES_WARNING)
        boxes = boxes[:MAX_BOX_TYPES]

    pallet = prepare_pallet(request)
    if min(pallet.length, pallet.width, pallet.max_height, pallet.max_payload) <= 0:
        logger.warning(
            f"degenerate pallet {pallet.length}x{pallet.width}x{pallet.max_height} mm, "
            f"payload {pallet.max_payload} kg"
        )
        warnings.append(DEGENERATE_PALLET_WARNING)

    box_types = prepare_box_types(boxes)
    logger.info(
        f"pallet load request: {pallet.name} {pallet.length}x{pallet.width}x{pallet.max_height} mm, "
        f"payload {pallet.max_payload} kg, {len(box_types)} box types, "
        f"{sum(b.quantity for b in box_types)} boxes"
    )

    packer = PalletPacker(
        pallet,
        max_placements=max_placements if max_placements is not None else config.MAX_PLACEMENTS,
        time_limit=time_limit if time_limit is not None else config.TIME_LIMIT_SECONDS,
    )
    outcome = packer.pack(box_types)

    result = build_result(outcome, pallet, warnings)
    log_solution_summary(result)
    return result
