import math

from route_planner.models.domain import Outlet, RouteSegment
from route_planner.services.routing.catalog import SegmentGraph, collect_outlets, find_attribute_conflicts


def _segment(src: int, dst: int, **overrides) -> RouteSegment:
    values = dict(
        source_id=src,
        dest_id=dst,
        travel_time=600.0,
        distance=10.0,
        travel_cost=5.0,
        source_priority=1,
        dest_priority=2,
        source_visit_minutes=20.0,
        dest_visit_minutes=0.0,
        source_frequency=3,
        dest_frequency=1,
        source_frequency_priority=0,
        dest_frequency_priority=1,
    )
    values.update(overrides)
    return RouteSegment(**values)


def test_collect_outlets_registers_both_endpoints_with_defaults():
    outlets = collect_outlets([_segment(1, 2)])

    assert list(outlets) == [1, 2]
    assert outlets[1] == Outlet(outlet_id=1, priority=1, frequency=3, frequency_priority=0, visit_duration=1200.0)
    assert outlets[2].visit_duration == 1800.0
    assert outlets[2].frequency_priority == 1


def test_collect_outlets_first_occurrence_wins():
    segments = [
        _segment(1, 2),
        _segment(2, 1, source_priority=9, source_frequency=7, dest_visit_minutes=45.0),
    ]

    outlets = collect_outlets(segments)

    assert outlets[2].priority == 2
    assert outlets[2].frequency == 1
    assert outlets[1].visit_duration == 1200.0


def test_collect_outlets_is_deterministic():
    segments = [_segment(1, 2), _segment(2, 3, source_priority=5), _segment(3, 1)]

    assert collect_outlets(segments) == collect_outlets(segments)


def test_find_attribute_conflicts_reports_disagreeing_edges():
    segments = [
        _segment(1, 2),
        _segment(2, 3, source_priority=2, source_frequency=1, source_frequency_priority=1, source_visit_minutes=0.0),
        _segment(2, 1, source_priority=9, source_frequency=1, source_frequency_priority=1, source_visit_minutes=0.0,
                 dest_priority=1, dest_frequency=3, dest_frequency_priority=0, dest_visit_minutes=20.0),
    ]

    conflicts = find_attribute_conflicts(segments)

    assert list(conflicts) == [2]
    assert conflicts[2][0].priority == 9
    # Detection never alters the catalog itself.
    assert collect_outlets(segments)[2].priority == 2


def test_find_attribute_conflicts_empty_for_consistent_input():
    segments = [
        _segment(1, 2),
        _segment(2, 1, source_priority=2, source_frequency=1, source_frequency_priority=1, source_visit_minutes=0.0,
                 dest_priority=1, dest_frequency=3, dest_frequency_priority=0, dest_visit_minutes=20.0),
    ]

    assert find_attribute_conflicts(segments) == {}


def test_segment_graph_indexes_outgoing_edges():
    first = _segment(1, 2, distance=10.0)
    second = _segment(1, 3, distance=30.0)
    duplicate = _segment(1, 2, distance=99.0, travel_time=1.0)
    graph = SegmentGraph([first, second, duplicate])

    assert graph.outgoing(1) == [first, second, duplicate]
    assert graph.out_degree(1) == 3
    assert graph.has_outgoing(1)
    assert not graph.has_outgoing(2)
    assert graph.mean_outgoing_distance(1) == (10.0 + 30.0 + 99.0) / 3
    assert math.isinf(graph.mean_outgoing_distance(2))
    assert graph.edge(1, 2) is first
    assert graph.edge(2, 1) is None
