import numpy as np

from palletload.model.blf_packer import BottomLeftFill
from palletload.model.entities import BoxType, Orientation, Pallet, RotationMode
from palletload.model.geometry import placed_boxes_to_array
from palletload.model.pallet_packer import (
    STOP_EXHAUSTED,
    STOP_PLACEMENT_BUDGET,
    STOP_TIME_BUDGET,
    PalletPacker,
)


EUR = Pallet(name="EUR", length=1200.0, width=800.0, max_height=1500.0, max_payload=1200.0)


def _box_type(id="box", length=400.0, width=300.0, height=200.0, weight=10.0,
              quantity=10, rotation=RotationMode.fixed):
    return BoxType(
        id=id,
        length=length,
        width=width,
        height=height,
        weight=weight,
        quantity=quantity,
        rotation=rotation,
        color="#3b82f6",
    )


def test_blf_starts_at_origin():
    blf = BottomLeftFill(EUR)
    position = blf.find_position(Orientation(400, 300, 200, 0), np.zeros((0, 6)))
    assert position == (0.0, 0.0, 0.0)


def test_blf_returns_none_when_box_exceeds_pallet():
    blf = BottomLeftFill(EUR)
    assert blf.find_position(Orientation(1300, 300, 200, 0), np.zeros((0, 6))) is None
    assert blf.find_position(Orientation(400, 300, 1600, 0), np.zeros((0, 6))) is None


def test_fills_floor_before_stacking():
    outcome = PalletPacker(EUR).pack([_box_type()])
    positions = [box.position for box in outcome.placed]
    assert positions == [
        (0.0, 0.0, 0.0),
        (0.0, 300.0, 0.0),
        (400.0, 0.0, 0.0),
        (400.0, 300.0, 0.0),
        (800.0, 0.0, 0.0),
        (800.0, 300.0, 0.0),
        (0.0, 0.0, 200.0),
        (0.0, 300.0, 200.0),
        (400.0, 0.0, 200.0),
        (400.0, 300.0, 200.0),
    ]
    assert outcome.unplaced == []
    assert outcome.total_weight == 100.0
    assert outcome.stop_reason == STOP_EXHAUSTED


def test_largest_type_is_placed_first():
    small = _box_type(id="small", length=100.0, width=100.0, height=100.0, quantity=1)
    big = _box_type(id="big", quantity=1)
    outcome = PalletPacker(EUR).pack([small, big])
    assert [box.box_type_id for box in outcome.placed] == ["big", "small"]
    assert outcome.placed[1].position == (0.0, 300.0, 0.0)


def test_payload_ceiling_is_reached_exactly():
    pallet = Pallet(name="EUR", length=1200.0, width=800.0, max_height=1500.0, max_payload=1000.0)
    outcome = PalletPacker(pallet).pack([_box_type(weight=250.0)])
    assert len(outcome.placed) == 4
    assert outcome.total_weight == 1000.0
    assert outcome.unplaced[0].box_type_id == "box"
    assert outcome.unplaced[0].count == 6


def test_full_rotation_stands_long_box_upright():
    pole = _box_type(id="pole", length=1300.0, width=100.0, height=100.0,
                     quantity=1, rotation=RotationMode.full)
    outcome = PalletPacker(EUR).pack([pole])
    assert len(outcome.placed) == 1
    assert outcome.placed[0].rotation_id == 3
    assert outcome.placed[0].dims == (100.0, 100.0, 1300.0)


def test_zero_quantity_types_are_ignored():
    outcome = PalletPacker(EUR).pack([_box_type(quantity=0)])
    assert outcome.placed == []
    assert outcome.unplaced == []


def test_placement_budget_stops_packing():
    outcome = PalletPacker(EUR, max_placements=3).pack([_box_type()])
    assert len(outcome.placed) == 3
    assert outcome.stop_reason == STOP_PLACEMENT_BUDGET
    assert outcome.unplaced_total == 7


def test_placed_data_matches_boxes():
    outcome = PalletPacker(EUR).pack([_box_type(quantity=2)])
    data = placed_boxes_to_array(outcome.placed)
    assert data.shape == (2, 6)
    assert data[1].tolist() == [0.0, 300.0, 0.0, 400.0, 300.0, 200.0]


def test_budget_not_reported_when_everything_fits():
    outcome = PalletPacker(EUR, max_placements=3).pack([_box_type(quantity=3)])
    assert len(outcome.placed) == 3
    assert outcome.stop_reason == STOP_EXHAUSTED


def test_time_budget_stops_packing():
    outcome = PalletPacker(EUR, time_limit=0).pack([_box_type()])
    assert outcome.stop_reason == STOP_TIME_BUDGET
    assert outcome.placed == []
    assert outcome.unplaced_total == 10


def test_repeated_pack_starts_fresh():
    packer = PalletPacker(EUR)
    first = packer.pack([_box_type(quantity=2)])
    second = packer.pack([_box_type(quantity=2)])
    assert len(second.placed) == 2
    assert second.total_weight == 20.0
    assert second.placed == first.placed
    assert len(packer.placed) == 2
