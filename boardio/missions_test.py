"""Tests for deployment maps and zone containment."""

import math

import pytest
from shapely.geometry import Polygon as ShapelyPolygon

from rules.types import Base, Model

from .missions import (
    DEPLOYMENTS,
    OBJECTIVE_CONTROL_RADIUS,
    OBJECTIVE_RADIUS,
    get_deployment,
    model_in_zone,
)


def _m(x, y, radius=0.5):
    return Model("m", x, y, Base.circle(radius))


class TestDeploymentData:
    def test_six_deployments(self):
        assert list(DEPLOYMENTS) == [
            "Dawn of War",
            "Hammer and Anvil",
            "Tipping Point",
            "Search and Destroy",
            "Sweeping Engagement",
            "Crucible of Battle",
        ]

    def test_two_valid_zones_on_table(self):
        for name, deployment in DEPLOYMENTS.items():
            zones = deployment["zones"]
            assert sorted(zones) == [1, 2], name
            for zone in zones.values():
                assert len(zone) >= 3
                assert ShapelyPolygon(zone).is_valid, name
                for x, y in zone:
                    assert -1e-9 <= x <= 60 + 1e-9
                    assert -1e-9 <= y <= 44 + 1e-9

    def test_zones_do_not_overlap(self):
        for name, deployment in DEPLOYMENTS.items():
            a = ShapelyPolygon(deployment["zones"][1])
            b = ShapelyPolygon(deployment["zones"][2])
            assert a.intersection(b).area == 0, name

    def test_objectives(self):
        """Five markers each, the centre one primary."""
        for deployment in DEPLOYMENTS.values():
            objectives = deployment["objectives"]
            assert len(objectives) == 5
            primary = [o for o in objectives if o["primary"]]
            assert len(primary) == 1
            assert (primary[0]["x_inches"], primary[0]["y_inches"]) == (
                30,
                22,
            )
            assert [o["id"] for o in objectives] == ["1", "2", "3", "4", "5"]

    def test_search_and_destroy_arc(self):
        """Curved edges keep 9" from the table centre."""
        zone = DEPLOYMENTS["Search and Destroy"]["zones"][1]
        arc = zone[1:-2]
        assert len(arc) > 2
        for x, y in arc:
            assert abs(math.hypot(x - 30, y - 22) - 9) < 1e-9
        assert abs(arc[-1][0] - 30) < 1e-9
        assert abs(arc[-1][1] - 31) < 1e-9

    def test_marker_sizes(self):
        assert abs(OBJECTIVE_RADIUS - 20 / 25.4) < 1e-9
        assert abs(OBJECTIVE_CONTROL_RADIUS - (3 + 20 / 25.4)) < 1e-9

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            get_deployment("Pitched Battle")


class TestModelInZone:
    def test_strip_zone(self):
        zone = get_deployment("Dawn of War")["zones"][1]
        assert model_in_zone(_m(10, 40), zone)
        assert not model_in_zone(_m(10, 20), zone)

    def test_partly_outside_is_not_in(self):
        zone = get_deployment("Dawn of War")["zones"][1]
        assert not model_in_zone(_m(10, 32.2), zone)

    def test_flush_with_edge_is_in(self):
        zone = get_deployment("Dawn of War")["zones"][1]
        assert model_in_zone(_m(10, 32.5), zone)

    def test_concave_zone(self):
        """Tipping Point steps out at y=22; the notch is outside."""
        zone = get_deployment("Tipping Point")["zones"][1]
        assert model_in_zone(_m(16, 30), zone)
        assert not model_in_zone(_m(16, 10), zone)

    def test_rectangular_base(self):
        zone = get_deployment("Hammer and Anvil")["zones"][1]
        hull = Model("tank", 17, 22, Base.rectangle(4, 6))
        assert not model_in_zone(hull, zone)
        hull.x = 10
        assert model_in_zone(hull, zone)
