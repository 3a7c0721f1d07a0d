"""VehicleInfo class for vehicle identification and odometer reading."""


class VehicleInfo:
    """Vehicle identification plus the current odometer reading."""

    def __init__(
        self,
        year: int = 1969,
        make: str = "Volkswagen",
        model: str = "Beetle",
        vin: str = "",
        mileage: int = 0,
    ):
        self.year = year
        self.make = make
        self.model = model
        self.vin = vin
        self.mileage = mileage

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.make} {self.model}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, VehicleInfo):
            return NotImplemented
        return (self.year, self.make, self.model, self.vin, self.mileage) == (
            other.year,
            other.make,
            other.model,
            other.vin,
            other.mileage,
        )

    def __repr__(self) -> str:
        return f"VehicleInfo({self.name!r}, vin={self.vin!r}, mileage={self.mileage})"
