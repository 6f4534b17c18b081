#
# Panel Units Categories
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import StrEnum, unique


# Enums ----------------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class CategoryName(StrEnum):
    """
    Fixed set of unit categories.

    Declaration order is registry order: lookups that scan categories by a bare
    unit id return the first category declared here.
    """
    TIME           = "Time"
    THROUGHPUT     = "Throughput"
    DATA           = "Data"
    DATA_RATE      = "Data Rate"
    HASH_RATE      = "Hash Rate"
    MISCELLANEOUS  = "Miscellaneous"
    ACCELERATION   = "Acceleration"
    ANGLE          = "Angle"
    AREA           = "Area"
    COMPUTATION    = "Computation"
    CONCENTRATION  = "Concentration"
    CURRENCY       = "Currency"
    DATETIME       = "Datetime"
    ENERGY         = "Energy"
    FLOW           = "Flow"
    FORCE          = "Force"
    MASS           = "Mass"
    LENGTH         = "Length"
    PRESSURE       = "Pressure"
    RADIATION      = "Radiation"
    ROTATION_SPEED = "Rotation Speed"
    TEMPERATURE    = "Temperature"
    VELOCITY       = "Velocity"
    VOLUME         = "Volume"
    BOOLEAN        = "Boolean"
# @formatter:on


category_names = tuple(name.value for name in CategoryName)
