"""
Application-wide constants for the weather decision engine.

This module defines default values and constants used throughout the engine.
Curve breakpoints specific to one quantity are defined in the normalization
modules that use them.
"""

# Score range
MIN_SCORE = 0.0
MAX_SCORE = 100.0

# Configuration validation
WEIGHT_SUM_TOLERANCE = 0.01
MIN_WINDOW_DURATION = 1  # hours

# Recommendation
RECOMMENDATION_VALIDITY_MINUTES = 10
MAX_WINDOW_CONFIDENCE_BONUS = 0.3
WINDOW_CONFIDENCE_STEP = 0.1
VARIANCE_CONFIDENCE_WEIGHT = 0.2
VARIANCE_REFERENCE_STD = 20.0
DISQUALIFICATION_CONFIDENCE_WEIGHT = 0.2
STRONG_WIND_WARNING_KMH = 40.0
SHORT_WINDOW_HOURS = 3.0

# Window detection defaults
DEFAULT_MAX_GAP = 1  # hours
DEFAULT_MERGE_GAP_HOURS = 1.0
WINDOW_LENGTH_REFERENCE = 6.0  # hours for full length credit

# Vapor Pressure Constants (Magnus/Tetens formula)
MAGNUS_A = 0.6108  # kPa
MAGNUS_B = 17.27
MAGNUS_C = 237.3  # °C

# Dew point (Magnus-Tetens, Lawrence 2005 form)
DEW_POINT_A = 17.27
DEW_POINT_B = 237.7  # °C

# Absolute humidity (Bolton 1980)
BOLTON_E0 = 6.112  # hPa
BOLTON_B = 17.67
BOLTON_C = 243.5  # °C
WATER_VAPOR_FACTOR = 216.7  # g K / J

# Wind chill (Environment Canada / NWS 2001)
WIND_CHILL_MAX_TEMP = 10.0  # °C
WIND_CHILL_MIN_SPEED = 4.8  # km/h

# Heat index (NWS Rothfusz regression)
HEAT_INDEX_MIN_TEMP = 27.0  # °C
HEAT_INDEX_MIN_HUMIDITY = 40.0  # %

# Pressure
STANDARD_PRESSURE = 1013.25  # hPa
LOW_PRESSURE = 990.0  # hPa
HIGH_PRESSURE = 1030.0  # hPa

# Geography
EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LATITUDE = 111.0
KM_PER_DEGREE_LONGITUDE = 69.0  # at UK latitudes
COASTAL_INFLUENCE_DECAY_KM = 15.0
COASTAL_INFLUENCE_THRESHOLD = 0.3
OFFSHORE_ANGLE_TOLERANCE = 60.0  # degrees
IDW_NEIGHBOURS = 3

# Wind
PREVAILING_WIND_DIRECTION = 225.0  # degrees, south-westerly
SHELTER_WIND_REDUCTION = 0.5

# Solar geometry (FAO-56)
SOLAR_DECLINATION_AMPLITUDE = 0.409
SOLAR_DECLINATION_PHASE = 1.39  # radians
PAR_FRACTION = 0.475

# Upstream defaults for missing forecast fields
DEFAULT_PRESSURE = STANDARD_PRESSURE  # hPa
DEFAULT_VISIBILITY = 10.0  # km
DEFAULT_WIND_DIRECTION = 0.0  # degrees
