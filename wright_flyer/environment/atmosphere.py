"""
Standard Atmosphere Model (troposphere)

Provides temperature, pressure and density as a function of altitude.

Units: SI (meters, kelvin, pascals, kg/m³)

The Wright Flyer never left the first few meters of the troposphere, so
only the linear-lapse layer is modelled.
"""


# Sea-level standard atmosphere
AIR_DENSITY_SEA_LEVEL = 1.225   # kg/m³
SEA_LEVEL_TEMPERATURE = 288.15  # K
SEA_LEVEL_PRESSURE = 101325.0   # Pa
TEMPERATURE_LAPSE_RATE = 0.0065  # K/m
GAS_CONSTANT = 287.05           # J/(kg·K)
BAROMETRIC_EXPONENT = 5.257     # g / (L * R)


class StandardAtmosphere:
    """
    ISA troposphere model, evaluated at a geometric altitude (m).

    Notes
    -----
    T = T0 - L * h
    p = p0 * (T / T0) ** 5.257
    rho = p / (R * T)
    """

    T0 = SEA_LEVEL_TEMPERATURE
    P0 = SEA_LEVEL_PRESSURE
    R = GAS_CONSTANT
    lapse_rate = TEMPERATURE_LAPSE_RATE
    exponent = BAROMETRIC_EXPONENT

    @classmethod
    def temperature_at(cls, altitude: float) -> float:
        return cls.T0 - cls.lapse_rate * altitude

    @classmethod
    def pressure_at(cls, altitude: float) -> float:
        return cls.P0 * (cls.temperature_at(altitude) / cls.T0) ** cls.exponent

    @classmethod
    def density_at(cls, altitude: float) -> float:
        """
        Air density from the barometric formula and the ideal gas law.

        Parameters
        ----------
        altitude : float
            Altitude in meters

        Returns
        -------
        float
            Density (kg/m³)
        """
        return cls.pressure_at(altitude) / (cls.R * cls.temperature_at(altitude))
