#!/usr/bin/env python3
"""Tests for VehicleInfo class."""

from maintlog import VehicleInfo


class TestVehicleInfo:
    """Tests for VehicleInfo class."""

    def test_defaults(self):
        info = VehicleInfo()
        assert info.year == 1969
        assert info.make == "Volkswagen"
        assert info.model == "Beetle"
        assert info.vin == ""
        assert info.mileage == 0

    def test_name_property(self):
        """Name property returns formatted vehicle name."""
        info = VehicleInfo(1972, "Volkswagen", "Super Beetle")
        assert info.name == "1972 Volkswagen Super Beetle"

    def test_equality(self):
        assert VehicleInfo(vin="X", mileage=5) == VehicleInfo(vin="X", mileage=5)
        assert VehicleInfo(mileage=5) != VehicleInfo(mileage=6)
