from fleetsite.optimization.builder import VariableIndex


def test_assign_index_is_a_bijection():
    idx = VariableIndex(num_facilities=3, num_vehicles=4, num_customers=4)
    positions = [
        idx.assign_index(f, v, c)
        for f in range(3) for v in range(4) for c in range(4)
    ]
    # Row-major over (f, v, c): contiguous and ordered
    assert positions == list(range(idx.num_assign))
    for pos in positions:
        assert idx.assign_index(*idx.unravel_assign(pos)) == pos


def test_vehicle_index():
    idx = VariableIndex(num_facilities=2, num_vehicles=3, num_customers=3)
    assert idx.num_vehicle_slots == 6
    assert [idx.vehicle_index(f, v) for f in range(2) for v in range(3)] == list(range(6))
