"""
The `constants` module defines the mathematical, time and physical constants used by the
heliocentric two-body engine. Distances are in astronomical units and times in days.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5  # Offset between Julian Date and Modified Julian Date

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
MJD2000 = 51544.5

"""
Number of seconds in a day. Units: *s/day*
"""
DAY_S = 86400.0

# Physical Constants
"""
Astronomical Unit expressed in kilometres. Units: *km/AU*

References:

1. P. Gérard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU_KM = 149597870.700  # [km] Astronomical Unit IAU 2010

# Sun Constants
"""
Gravitational parameter of the Sun in heliocentric units. Equivalent to the
square of the Gaussian gravitational constant. Units: *AU^3/day^2*

References:

1. JPL Horizons, heliocentric osculating elements (GM used for the
   ecliptic element sets).
"""
GM_SUN_AU = 0.00029591220828559  # [AU^3/day^2]

# Range Limits
"""
Process-wide maximum heliocentric range handled by the trajectory sampler. Bounding
coordinates reported for display are clamped to this value. Units: *AU*
"""
MAX_RANGE = 55.0

"""
Default display range. Line-of-nodes endpoints beyond this distance are collapsed. Units: *AU*
"""
MAX_DISPLAY_RANGE = 50.0
