import math

from palletload.model.entities import Pallet, PlacedBox
from palletload.model.metrics import (
    compute_center_of_gravity,
    compute_load_metrics,
    compute_utilization,
)


EUR = Pallet(name="EUR", length=1200.0, width=800.0, max_height=1500.0, max_payload=1200.0)


def _placed(x, y, z, l=400.0, w=300.0, h=200.0, weight=10.0):
    return PlacedBox(
        box_type_id="box",
        x=x,
        y=y,
        z=z,
        l=l,
        w=w,
        h=h,
        rotation_id=0,
        weight=weight,
        color="#3b82f6",
    )


def test_utilization_percentages():
    placed = [_placed(0, 0, 0), _placed(0, 300, 0), _placed(0, 0, 200)]
    utilization = compute_utilization(placed, EUR)
    assert math.isclose(utilization.volume_percent, 3 * 24e6 / 1.44e9 * 100)
    assert math.isclose(utilization.weight_percent, 30 / 1200 * 100)
    assert math.isclose(utilization.floor_percent, 2 * 120000 / 960000 * 100)


def test_floor_coverage_counts_coincident_footprints_twice():
    utilization = compute_utilization([_placed(0, 0, 0), _placed(0, 0, 0)], EUR)
    assert math.isclose(utilization.floor_percent, 25.0)


def test_zero_denominators_give_zero():
    flat = Pallet(name="flat", length=1200.0, width=800.0, max_height=0.0, max_payload=0.0)
    utilization = compute_utilization([_placed(0, 0, 0)], flat)
    assert utilization.volume_percent == 0.0
    assert utilization.weight_percent == 0.0


def test_load_metrics():
    placed = [_placed(0, 0, 0), _placed(400, 0, 0), _placed(0, 0, 200)]
    metrics = compute_load_metrics(placed, EUR)
    assert metrics.total_boxes == 3
    assert metrics.total_weight == 30.0
    assert metrics.total_layers == 2
    assert metrics.max_height == 400.0
    assert metrics.wasted_volume == 1.44e9 - 3 * 24e6


def test_empty_load_metrics():
    metrics = compute_load_metrics([], EUR)
    assert metrics.total_layers == 0
    assert metrics.max_height == 0.0
    assert metrics.wasted_volume == EUR.volume


def test_center_of_gravity_of_empty_pallet():
    cg = compute_center_of_gravity([], EUR)
    assert (cg.x, cg.y, cg.z, cg.is_balanced) == (600.0, 400.0, 0.0, True)


def test_center_of_gravity_is_weighted():
    placed = [_placed(0, 250, 0, weight=30.0), _placed(800, 250, 0, weight=10.0)]
    cg = compute_center_of_gravity(placed, EUR)
    assert cg.x == (200 * 30 + 1000 * 10) / 40
    assert cg.y == 400.0
    assert cg.z == 100.0
    assert cg.is_balanced


def test_corner_load_is_unbalanced():
    cg = compute_center_of_gravity([_placed(0, 0, 0, l=100.0, w=100.0, h=100.0)], EUR)
    assert not cg.is_balanced


def test_weightless_boxes_fall_back_to_mean_center():
    placed = [_placed(0, 0, 0, weight=0.0), _placed(800, 0, 0, weight=0.0)]
    cg = compute_center_of_gravity(placed, EUR)
    assert cg.x == 600.0
    assert cg.y == 150.0
