#
# Panel Units Registry
#

"""
Static registry of unit categories and their scale factors.

Every category lists its units in display order. A unit's factor says how many base
units of its category one unit equals; factors are exact Fractions, so SI/IEC data
sizes, 1/60 rates and decimal-defined imperial units are stored without rounding.

Units with no linear relation to their category base (booleans, datetime formats,
temperatures, logarithmic or mis-filed units, fiat currencies) carry factor None.

The registry is built once at import and never mutated: tuples, frozen dataclasses
and frozendict indexes only.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Iterator

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .categories import CategoryName
from .sentinels import NOT_FOUND, NotFoundType


# Classes --------------------------------------------------------------------------------------------------------------

class UnitRegistryError(ValueError):
    """Registry tables violate an integrity rule."""


@dataclass(frozen=True)
class UnitDef:
    """
    Single unit: stable id, display label and factor relative to its category base.

    The factor is converted to an exact Fraction; int, str ("1/60", "1e-9", "0.0254")
    and Fraction inputs are accepted. None means the unit has no numeric factor.
    """

    id: str
    label: str
    factor: Fraction | int | str | None = None

    def __post_init__(self):
        if self.factor is not None and not isinstance(self.factor, Fraction):
            object.__setattr__(self, 'factor', Fraction(self.factor))


@dataclass(frozen=True)
class Category:
    """
    Named, ordered group of units sharing one base unit.

    Attributes:
        name (CategoryName): Category name.
        units (tuple[UnitDef, ...]): Units in display order.
        base (str | None): Id of the unit whose factor is exactly 1, None if the
                           category has no numeric base.
    """

    name: CategoryName
    units: tuple[UnitDef, ...]
    base: str | None = None

    _index: frozendict = field(init=False, default=None, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'units', tuple(self.units))
        object.__setattr__(self, '_index', frozendict({u.id: u for u in self.units}))

    def __contains__(self, unit_id) -> bool:
        return isinstance(unit_id, str) and unit_id in self._index

    def __iter__(self) -> Iterator[UnitDef]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)

    @property
    def unit_ids(self) -> tuple[str, ...]:
        """Unit ids in display order."""
        return tuple(u.id for u in self.units)

    @property
    def has_factors(self) -> bool:
        """True if at least one unit of the category has a numeric factor."""
        return any(u.factor is not None for u in self.units)

    def get(self, unit_id: str) -> UnitDef | None:
        """Unit by id, or None."""
        if not isinstance(unit_id, str):
            return None
        return self._index.get(unit_id)

    def factor_of(self, unit_id: str) -> Fraction | NotFoundType:
        """Factor of a unit in this category, NOT_FOUND if absent or without a factor."""
        unit = self.get(unit_id)
        if unit is None or unit.factor is None:
            return NOT_FOUND
        return unit.factor


@dataclass(frozen=True)
class SelectOption:
    """Menu entry: display label and unit id."""

    label: str
    value: str


# Constants ------------------------------------------------------------------------------------------------------------

_KIB = 1024
_GALLON_M3 = Fraction("0.003785411784")
_CUBIC_FOOT_M3 = Fraction("0.028316846592")
_PSI_PA = Fraction("0.45359237") * Fraction("9.80665") / Fraction("0.0254") ** 2

# @formatter:off
_TIME_UNITS = (
    UnitDef("hertz",        "Hertz (1/s)",                      1),
    UnitDef("nanoseconds",  "nanoseconds (ns)",                 "1e-9"),
    UnitDef("microseconds", "microseconds (µs)",                "1e-6"),
    UnitDef("milliseconds", "milliseconds (ms)",                "1e-3"),
    UnitDef("seconds",      "seconds (s)",                      1),
    UnitDef("minutes",      "minutes (m)",                      60),
    UnitDef("hours",        "hours (h)",                        3600),
    UnitDef("days",         "days (d)",                         86400),
    UnitDef("durationMs",   "duration in ms (dtdurationms)",    "1e-3"),
    UnitDef("durationS",    "duration in s (dtdurations)",      1),
    UnitDef("durationHms",  "duration in h:m:s (dthms)",        1),
    UnitDef("durationDhms", "duration in d:h:m:s (dtdhms)",     1),
    UnitDef("timeticks",    "timeticks (timeticks)",            "1/100"),
    UnitDef("clockMs",      "clock in ms (clockms)",            "1e-3"),
    UnitDef("clockS",       "clock in s (clocks)",              1),
)

_THROUGHPUT_UNITS = (
    UnitDef("countsPerSec",   "counts/sec (cps)",           1),
    UnitDef("opsPerSec",      "ops/sec (ops)",              1),
    UnitDef("requestsPerSec", "requests/sec (reqps)",       1),
    UnitDef("readsPerSec",    "reads/sec (rps)",            1),
    UnitDef("writesPerSec",   "writes/sec (wps)",           1),
    UnitDef("ioOpsPerSec",    "I/O operations/sec (iops)",  1),
    UnitDef("countsPerMin",   "counts/min (cpm)",           "1/60"),
    UnitDef("opsPerMin",      "ops/min (opm)",              "1/60"),
    UnitDef("readsPerMin",    "reads/min (rpm)",            "1/60"),
    UnitDef("writesPerMin",   "writes/min (wpm)",           "1/60"),
)

_DATA_UNITS = (
    UnitDef("bytesIEC",  "bytes(IEC)",  1),
    UnitDef("bytesSI",   "bytes(SI)",   1),
    UnitDef("bitsIEC",   "bits(IEC)",   "1/8"),
    UnitDef("bitsSI",    "bits(SI)",    "1/8"),
    UnitDef("kibibytes", "kibibytes",   _KIB),
    UnitDef("kilobytes", "kilobytes",   10**3),
    UnitDef("mebibytes", "mebibytes",   _KIB**2),
    UnitDef("megabytes", "megabytes",   10**6),
    UnitDef("gibibytes", "gibibytes",   _KIB**3),
    UnitDef("gigabytes", "gigabytes",   10**9),
    UnitDef("tebibytes", "tebibytes",   _KIB**4),
    UnitDef("terabytes", "terabytes",   10**12),
    UnitDef("pebibytes", "pebibytes",   _KIB**5),
    UnitDef("petabytes", "petabytes",   10**15),
)

_DATA_RATE_UNITS = (
    UnitDef("packetsPerSec",      "packets/sec",     1),
    UnitDef("bytesPerSecIEC",     "bytes/sec(IEC)",  1),
    UnitDef("bytesPerSecSI",      "bytes/sec(SI)",   1),
    UnitDef("bitsPerSecIEC",      "bits/sec(IEC)",   "1/8"),
    UnitDef("bitsPerSecSI",       "bits/sec(SI)",    "1/8"),
    UnitDef("kibibytesPerSecIEC", "kibibytes/sec",   _KIB),
    UnitDef("kibibitsPerSecIEC",  "kibibits/sec",    Fraction(_KIB, 8)),
    UnitDef("kilobytesPerSecSI",  "kilobytes/sec",   10**3),
    UnitDef("kilobitsPerSecSI",   "kilobits/sec",    Fraction(10**3, 8)),
    UnitDef("mebibytesPerSecIEC", "mebibytes/sec",   _KIB**2),
    UnitDef("mebibitsPerSecIEC",  "mebibits/sec",    Fraction(_KIB**2, 8)),
    UnitDef("megabytesPerSecSI",  "megabytes/sec",   10**6),
    UnitDef("megabitsPerSecSI",   "megabits/sec",    Fraction(10**6, 8)),
    UnitDef("gibibytesPerSecIEC", "gibibytes/sec",   _KIB**3),
    UnitDef("gibibitsPerSecIEC",  "gibibits/sec",    Fraction(_KIB**3, 8)),
    UnitDef("gigabytesPerSecSI",  "gigabytes/sec",   10**9),
    UnitDef("gigabitsPerSecSI",   "gigabits/sec",    Fraction(10**9, 8)),
    UnitDef("tebibytesPerSecIEC", "tebibytes/sec",   _KIB**4),
    UnitDef("tebibitsPerSecIEC",  "tebibits/sec",    Fraction(_KIB**4, 8)),
    UnitDef("terabytesPerSecSI",  "terabytes/sec",   10**12),
    UnitDef("terabitsPerSecSI",   "terabits/sec",    Fraction(10**12, 8)),
    UnitDef("pebibytesPerSecIEC", "pebibytes/sec",   _KIB**5),
    UnitDef("pebibitsPerSecIEC",  "pebibits/sec",    Fraction(_KIB**5, 8)),
    UnitDef("petabytesPerSecSI",  "petabytes/sec",   10**15),
    UnitDef("petabitsPerSecSI",   "petabits/sec",    Fraction(10**15, 8)),
)

_HASH_RATE_UNITS = (
    UnitDef("hashesPerSec",     "hashes/sec",      1),
    UnitDef("kilohashesPerSec", "kilohashes/sec",  "1e3"),
    UnitDef("megahashesPerSec", "megahashes/sec",  "1e6"),
    UnitDef("gigahashesPerSec", "gigahashes/sec",  "1e9"),
    UnitDef("terahashesPerSec", "terahashes/sec",  "1e12"),
    UnitDef("petahashesPerSec", "petahashes/sec",  "1e15"),
    UnitDef("exahashesPerSec",  "exahashes/sec",   "1e18"),
)

# Display formats share a neutral factor; a 0.0-1.0 ratio is 100 percent points.
_MISCELLANEOUS_UNITS = (
    UnitDef("none",               "none",                 1),
    UnitDef("string",             "String",               1),
    UnitDef("short",              "short",                1),
    UnitDef("percent",            "Percent (0-100)",      1),
    UnitDef("percentUnit",        "Percent (0.0-1.0)",    100),
    UnitDef("humidity",           "Humidity (%H)",        1),
    UnitDef("decibel",            "Decibel",              1),
    UnitDef("hexadecimal0x",      "Hexadecimal (0x)",     1),
    UnitDef("hexadecimal",        "Hexadecimal",          1),
    UnitDef("scientificNotation", "Scientific notation",  1),
    UnitDef("localeFormat",       "Locale format",        1),
    UnitDef("pixels",             "Pixels",               1),
)

_ACCELERATION_UNITS = (
    UnitDef("metersPerSecondSquared", "Meters/sec²",  1),
    UnitDef("feetPerSecondSquared",   "Feet/sec²",    "0.3048"),
    UnitDef("gUnit",                  "G unit",       "9.80665"),
)

_ANGLE_UNITS = (
    UnitDef("degree",    "Degrees (°)",  1),
    UnitDef("radian",    "Radians",      "57.295779513082320876798154814105"),
    UnitDef("gradian",   "Gradian",      "9/10"),
    UnitDef("arcMinute", "Arc Minutes",  "1/60"),
    UnitDef("arcSecond", "Arc Seconds",  "1/3600"),
)

_AREA_UNITS = (
    UnitDef("squareMeters", "Square Meters (m²)",  1),
    UnitDef("squareFeet",   "Square Feet (ft²)",   "0.09290304"),
    UnitDef("squareMiles",  "Square Miles (mi²)",  "2589988.110336"),
)

_COMPUTATION_UNITS = (
    UnitDef("flops",      "FLOP/s",   1),
    UnitDef("megaflops",  "MFLOP/s",  "1e6"),
    UnitDef("gigaflops",  "GFLOP/s",  "1e9"),
    UnitDef("teraflops",  "TFLOP/s",  "1e12"),
    UnitDef("petaflops",  "PFLOP/s",  "1e15"),
    UnitDef("exaflops",   "EFLOP/s",  "1e18"),
    UnitDef("zettaflops", "ZFLOP/s",  "1e21"),
    UnitDef("yottaflops", "YFLOP/s",  "1e24"),
)

# Mass per cubic meter only; normal-volume, ratio and molar units have no common base.
_CONCENTRATION_UNITS = (
    UnitDef("ppm",                           "parts-per-million (ppm)"),
    UnitDef("ppb",                           "parts-per-billion (ppb)"),
    UnitDef("nanogramsPerCubicMeter",        "nanogram per cubic meter (ng/m³)",           "1e-9"),
    UnitDef("nanogramsPerNormalCubicMeter",  "nanogram per normal cubic meter (ng/Nm³)"),
    UnitDef("microgramsPerCubicMeter",       "microgram per cubic meter (μg/m³)",          "1e-6"),
    UnitDef("microgramsPerNormalCubicMeter", "microgram per normal cubic meter (μg/Nm³)"),
    UnitDef("milligramsPerCubicMeter",       "milligram per cubic meter (mg/m³)",          "1e-3"),
    UnitDef("milligramsPerNormalCubicMeter", "milligram per normal cubic meter (mg/Nm³)"),
    UnitDef("gramsPerCubicMeter",            "gram per cubic meter (g/m³)",                1),
    UnitDef("gramsPerNormalCubicMeter",      "gram per normal cubic meter (g/Nm³)"),
    UnitDef("milligramsPerDecilitre",        "milligrams per decilitre (mg/dL)",           10),
    UnitDef("millimolesPerLitre",            "millimoles per litre (mmol/L)"),
)

# Fiat exchange rates are not static; only bitcoin subdivisions scale.
_CURRENCY_UNITS = (
    UnitDef("usd",  "Dollars ($)"),
    UnitDef("gbp",  "Pounds (£)"),
    UnitDef("eur",  "Euro (€)"),
    UnitDef("jpy",  "Yen (¥)"),
    UnitDef("rub",  "Rubles (₽)"),
    UnitDef("uah",  "Hryvnias (₴)"),
    UnitDef("brl",  "Real (R$)"),
    UnitDef("dkk",  "Danish Krone (kr)"),
    UnitDef("isk",  "Icelandic Króna (kr)"),
    UnitDef("nok",  "Norwegian Krone (kr)"),
    UnitDef("sek",  "Swedish Krona (kr)"),
    UnitDef("czk",  "Czech koruna (czk)"),
    UnitDef("chf",  "Swiss franc (CHF)"),
    UnitDef("pln",  "Polish Złoty (PLN)"),
    UnitDef("btc",  "Bitcoin (฿)",             1),
    UnitDef("mbtc", "Milli Bitcoin (฿)",       "1e-3"),
    UnitDef("ubtc", "Micro Bitcoin (฿)",       "1e-6"),
    UnitDef("zar",  "South African Rand (R)"),
    UnitDef("inr",  "Indian Rupee (₹)"),
    UnitDef("krw",  "South Korean Won (₩)"),
    UnitDef("idr",  "Indonesian Rupiah (Rp)"),
    UnitDef("php",  "Philippine Peso (PHP)"),
    UnitDef("vnd",  "Vietnamese Dong (VND)"),
)

_DATETIME_UNITS = (
    UnitDef("dateTimeIso",                "Datetime ISO"),
    UnitDef("dateTimeIsoNoDateIfToday",   "Datetime ISO (No date if today)"),
    UnitDef("dateTimeUs",                 "Datetime US"),
    UnitDef("dateTimeUsNoDateIfToday",    "Datetime US (No date if today)"),
    UnitDef("dateTimeLocal",              "Datetime local"),
    UnitDef("dateTimeLocalNoDateIfToday", "Datetime local (No date if today)"),
    UnitDef("dateTimeDefault",            "Datetime default"),
    UnitDef("dateTimeFromNow",            "From Now"),
)

# Factors are relative to the coherent SI unit of each unit's own quantity (W, J, C, A, V, Ω, F, H).
_ENERGY_UNITS = (
    UnitDef("watt",                   "Watt (W)",                         1),
    UnitDef("kilowatt",               "Kilowatt (kW)",                    "1e3"),
    UnitDef("megawatt",               "Megawatt (MW)",                    "1e6"),
    UnitDef("gigawatt",               "Gigawatt (GW)",                    "1e9"),
    UnitDef("milliwatt",              "Milliwatt (mW)",                   "1e-3"),
    UnitDef("wattPerSquareMeter",     "Watt per square meter (W/m²)"),
    UnitDef("voltAmpere",             "Volt-Ampere (VA)",                 1),
    UnitDef("kilovoltAmpere",         "Kilovolt-Ampere (kVA)",            "1e3"),
    UnitDef("voltAmpereReactive",     "Volt-Ampere reactive (VAr)",       1),
    UnitDef("kilovoltAmpereReactive", "Kilovolt-Ampere reactive (kVAr)",  "1e3"),
    UnitDef("wattHour",               "Watt-hour (Wh)",                   3600),
    UnitDef("wattHourPerKilogram",    "Watt-hour per Kilogram (Wh/kg)"),
    UnitDef("kilowattHour",           "Kilowatt-hour (kWh)",              "3.6e6"),
    UnitDef("kilowattMinute",         "Kilowatt-min (kWm)",               "6e4"),
    UnitDef("ampereHour",             "Ampere-hour (Ah)",                 3600),
    UnitDef("kiloampereHour",         "Kiloampere-hour (kAh)",            "3.6e6"),
    UnitDef("milliampereHour",        "Milliampere-hour (mAh)",           "3.6"),
    UnitDef("joule",                  "Joule (J)",                        1),
    UnitDef("electronVolt",           "Electron volt (eV)",               "1.602176634e-19"),
    UnitDef("ampere",                 "Ampere (A)",                       1),
    UnitDef("kiloampere",             "Kiloampere (kA)",                  "1e3"),
    UnitDef("milliampere",            "Milliampere (mA)",                 "1e-3"),
    UnitDef("volt",                   "Volt (V)",                         1),
    UnitDef("kilovolt",               "Kilovolt (kV)",                    "1e3"),
    UnitDef("millivolt",              "Millivolt (mV)",                   "1e-3"),
    UnitDef("decibelMilliwatt",       "Decibel-milliwatt (dBm)"),
    UnitDef("ohm",                    "Ohm (Ω)",                          1),
    UnitDef("kiloohm",                "Kiloohm (kΩ)",                     "1e3"),
    UnitDef("megaohm",                "Megaohm (MΩ)",                     "1e6"),
    UnitDef("farad",                  "Farad (F)",                        1),
    UnitDef("microfarad",             "Microfarad (µF)",                  "1e-6"),
    UnitDef("nanofarad",              "Nanofarad (nF)",                   "1e-9"),
    UnitDef("picofarad",              "Picofarad (pF)",                   "1e-12"),
    UnitDef("femtofarad",             "Femtofarad (fF)",                  "1e-15"),
    UnitDef("henry",                  "Henry (H)",                        1),
    UnitDef("millihenry",             "Millihenry (mH)",                  "1e-3"),
    UnitDef("microhenry",             "Microhenry (µH)",                  "1e-6"),
    UnitDef("lumens",                 "Lumens (Lm)"),
)

_FLOW_UNITS = (
    UnitDef("gallonsPerMinute",     "Gallons/min (gpm)",        _GALLON_M3 / 60),
    UnitDef("cubicMetersPerSecond", "Cubic meters/sec (cms)",   1),
    UnitDef("cubicFeetPerSecond",   "Cubic feet/sec (cfs)",     _CUBIC_FOOT_M3),
    UnitDef("cubicFeetPerMinute",   "Cubic feet/min (cfm)",     _CUBIC_FOOT_M3 / 60),
    UnitDef("litresPerHour",        "Litre/hour",               Fraction(1, 3_600_000)),
    UnitDef("litresPerMinute",      "Litre/min (L/min)",        Fraction(1, 60_000)),
    UnitDef("millilitresPerMinute", "milliLitre/min (mL/min)",  Fraction(1, 60_000_000)),
    UnitDef("lux",                  "Lux (lx)"),
)

_FORCE_UNITS = (
    UnitDef("newtonMeters",     "Newton-meters (Nm)",       1),
    UnitDef("kilonewtonMeters", "Kilonewton-meters (kNm)",  "1e3"),
    UnitDef("newtons",          "Newtons (N)",              1),
    UnitDef("kilonewtons",      "Kilonewtons (kN)",         "1e3"),
)

_MASS_UNITS = (
    UnitDef("milligram",  "milligram (mg)",  "1e-6"),
    UnitDef("gram",       "gram (g)",        "1e-3"),
    UnitDef("pound",      "pound (lb)",      "0.45359237"),
    UnitDef("kilogram",   "kilogram (kg)",   1),
    UnitDef("metricTon",  "metric ton (t)",  "1e3"),
)

_LENGTH_UNITS = (
    UnitDef("millimeter", "millimeter (mm)",  "1e-3"),
    UnitDef("inch",       "inch (in)",        "0.0254"),
    UnitDef("foot",       "feet (ft)",        "0.3048"),
    UnitDef("meter",      "meter (m)",        1),
    UnitDef("kilometer",  "kilometer (km)",   "1e3"),
    UnitDef("mile",       "mile (mi)",        "1609.344"),
)

_PRESSURE_UNITS = (
    UnitDef("millibars",       "Millibars",          100),
    UnitDef("bars",            "Bars",               "1e5"),
    UnitDef("kilobars",        "Kilobars",           "1e8"),
    UnitDef("pascals",         "Pascals",            1),
    UnitDef("hectopascals",    "Hectopascals",       100),
    UnitDef("kilopascals",     "Kilopascals",        "1e3"),
    UnitDef("inchesOfMercury", "Inches of mercury",  "3386.389"),
    UnitDef("psi",             "PSI",                _PSI_PA),
)

# Activity (Bq), absorbed dose (Gy), equivalent dose (Sv), exposure (C/kg) and dose rate (Sv/h)
_RADIATION_UNITS = (
    UnitDef("becquerel",                   "Becquerel (Bq)",             1),
    UnitDef("curie",                       "curie (Ci)",                 "3.7e10"),
    UnitDef("gray",                        "Gray (Gy)",                  1),
    UnitDef("rad",                         "rad",                        "1e-2"),
    UnitDef("sievert",                     "Sievert (Sv)",               1),
    UnitDef("millisievert",                "milliSievert (mSv)",         "1e-3"),
    UnitDef("microsievert",                "microSievert (µSv)",         "1e-6"),
    UnitDef("rem",                         "rem",                        "1e-2"),
    UnitDef("exposureCoulombsPerKilogram", "Exposure (C/kg)",            1),
    UnitDef("roentgen",                    "roentgen (R)",               "2.58e-4"),
    UnitDef("sievertsPerHour",             "Sievert/hour (Sv/h)",        1),
    UnitDef("millisievertsPerHour",        "milliSievert/hour (mSv/h)",  "1e-3"),
    UnitDef("microsievertsPerHour",        "microSievert/hour (µSv/h)",  "1e-6"),
)

_ROTATION_SPEED_UNITS = (
    UnitDef("revolutionsPerMinute", "Revolutions per minute (rpm)",  "1/60"),
    UnitDef("hertz",                "Hertz (Hz)",                    1),
    UnitDef("radiansPerSecond",     "Radians per second (rad/s)",    "0.15915494309189533576888376337251"),
    UnitDef("degreesPerSecond",     "Degrees per second (°/s)",      "1/360"),
)

# Temperature scales are affine, not proportional.
_TEMPERATURE_UNITS = (
    UnitDef("celsius",    "Celsius (°C)"),
    UnitDef("fahrenheit", "Fahrenheit (°F)"),
    UnitDef("kelvin",     "Kelvin (K)"),
)

_VELOCITY_UNITS = (
    UnitDef("metersPerSecond",   "meters/second (m/s)",    1),
    UnitDef("kilometersPerHour", "kilometers/hour (km/h)", "5/18"),
    UnitDef("milesPerHour",      "miles/hour (mph)",       "0.44704"),
    UnitDef("knot",              "knot (kn)",              "463/900"),
)

_VOLUME_UNITS = (
    UnitDef("millilitre",       "millilitre (mL)",     "1e-6"),
    UnitDef("litre",            "litre (L)",           "1e-3"),
    UnitDef("cubicMeter",       "cubic meter",         1),
    UnitDef("normalCubicMeter", "Normal cubic meter"),
    UnitDef("cubicDecimeter",   "cubic decimeter",     "1e-3"),
    UnitDef("gallons",          "gallons",             _GALLON_M3),
)

_BOOLEAN_UNITS = (
    UnitDef("trueFalse", "True / False"),
    UnitDef("yesNo",     "Yes / No"),
    UnitDef("onOff",     "On / Off"),
)

_CATEGORIES: tuple[Category, ...] = (
    Category(CategoryName.TIME,           _TIME_UNITS,           base="seconds"),
    Category(CategoryName.THROUGHPUT,     _THROUGHPUT_UNITS,     base="countsPerSec"),
    Category(CategoryName.DATA,           _DATA_UNITS,           base="bytesIEC"),
    Category(CategoryName.DATA_RATE,      _DATA_RATE_UNITS,      base="bytesPerSecIEC"),
    Category(CategoryName.HASH_RATE,      _HASH_RATE_UNITS,      base="hashesPerSec"),
    Category(CategoryName.MISCELLANEOUS,  _MISCELLANEOUS_UNITS,  base="none"),
    Category(CategoryName.ACCELERATION,   _ACCELERATION_UNITS,   base="metersPerSecondSquared"),
    Category(CategoryName.ANGLE,          _ANGLE_UNITS,          base="degree"),
    Category(CategoryName.AREA,           _AREA_UNITS,           base="squareMeters"),
    Category(CategoryName.COMPUTATION,    _COMPUTATION_UNITS,    base="flops"),
    Category(CategoryName.CONCENTRATION,  _CONCENTRATION_UNITS,  base="gramsPerCubicMeter"),
    Category(CategoryName.CURRENCY,       _CURRENCY_UNITS,       base="btc"),
    Category(CategoryName.DATETIME,       _DATETIME_UNITS),
    Category(CategoryName.ENERGY,         _ENERGY_UNITS,         base="watt"),
    Category(CategoryName.FLOW,           _FLOW_UNITS,           base="cubicMetersPerSecond"),
    Category(CategoryName.FORCE,          _FORCE_UNITS,          base="newtons"),
    Category(CategoryName.MASS,           _MASS_UNITS,           base="kilogram"),
    Category(CategoryName.LENGTH,         _LENGTH_UNITS,         base="meter"),
    Category(CategoryName.PRESSURE,       _PRESSURE_UNITS,       base="pascals"),
    Category(CategoryName.RADIATION,      _RADIATION_UNITS,      base="becquerel"),
    Category(CategoryName.ROTATION_SPEED, _ROTATION_SPEED_UNITS, base="hertz"),
    Category(CategoryName.TEMPERATURE,    _TEMPERATURE_UNITS),
    Category(CategoryName.VELOCITY,       _VELOCITY_UNITS,       base="metersPerSecond"),
    Category(CategoryName.VOLUME,         _VOLUME_UNITS,         base="cubicMeter"),
    Category(CategoryName.BOOLEAN,        _BOOLEAN_UNITS),
)
# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def list_categories() -> tuple[Category, ...]:
    """All categories in registry order. Returns the same tuple on every call."""
    return _CATEGORIES


def list_units() -> tuple[UnitDef, ...]:
    """
    All units of all categories flattened in registry order.

    Ids repeated across categories appear once per category.
    """
    return _ALL_UNITS


def get_category(name: str) -> Category | None:
    """Category by exact name, None if unknown."""
    if not isinstance(name, str):
        return None
    return _BY_NAME.get(name)


def is_known_category_name(name: str) -> bool:
    """
    True if name exactly matches a category name (case-sensitive, no stripping).

    Examples:
        >>> is_known_category_name("Data Rate")
        True
        >>> is_known_category_name("data rate")
        False
    """
    return get_category(name) is not None


def find_category_containing(unit_id: str) -> Category | None:
    """
    First category, in registry order, whose units include unit_id.

    Unit ids are only unique within a category. When an id is declared by several
    categories the earliest one wins, e.g. "hertz" resolves to Time, not Rotation Speed.
    Use get_unit() for a category-scoped lookup.
    """
    if not isinstance(unit_id, str):
        return None
    return _BY_UNIT.get(unit_id)


def options_for(category_name: str) -> list[SelectOption]:
    """
    Units of a category as (label, value) menu options in display order.

    Unknown category names yield an empty list.
    """
    category = get_category(category_name)
    if category is None:
        return []
    return [SelectOption(label=u.label, value=u.id) for u in category.units]


def get_unit(category_name: str, unit_id: str) -> UnitDef | None:
    """Unit by its (category, id) composite key, None if either part is unknown."""
    category = get_category(category_name)
    if category is None:
        return None
    return category.get(unit_id)


def unit_factor(category_name: str, unit_id: str) -> Fraction | NotFoundType:
    """
    Factor of a unit by its (category, id) composite key.

    Returns NOT_FOUND if the category or unit is unknown, or the unit has no factor.
    """
    category = get_category(category_name)
    if category is None:
        return NOT_FOUND
    return category.factor_of(unit_id)


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_registry(categories: tuple[Category, ...]) -> None:
    """
    Validate registry tables.

    Raises:
        UnitRegistryError: on the first violated rule.
    """
    names = tuple(c.name for c in categories)
    if names != tuple(CategoryName):
        raise UnitRegistryError(
            f"Categories must match CategoryName declaration order exactly, got {[str(n) for n in names]}"
        )

    for category in categories:
        seen = set()
        for unit in category.units:
            if not isinstance(unit.id, str) or not unit.id:
                raise UnitRegistryError(f"{category.name}: unit id must be a non-empty str, got {unit.id!r}")
            if unit.id in seen:
                raise UnitRegistryError(f"{category.name}: duplicate unit id '{unit.id}'")
            seen.add(unit.id)
            if unit.factor is not None and unit.factor <= 0:
                raise UnitRegistryError(f"{category.name}: factor of '{unit.id}' must be positive, got {unit.factor}")

        if category.base is not None:
            if category.base not in seen:
                raise UnitRegistryError(f"{category.name}: base unit '{category.base}' is not in the category")
            if category.get(category.base).factor != 1:
                raise UnitRegistryError(f"{category.name}: base unit '{category.base}' must have factor 1")


def _index_by_unit(categories: tuple[Category, ...]) -> frozendict:
    """Bare unit id -> first declaring category."""
    index = {}
    for category in categories:
        for unit in category.units:
            index.setdefault(unit.id, category)
    return frozendict(index)


# Module Sanity Checks -------------------------------------------------------------------------------------------------

_check_registry(_CATEGORIES)

_BY_NAME: frozendict = frozendict({c.name.value: c for c in _CATEGORIES})
_BY_UNIT: frozendict = _index_by_unit(_CATEGORIES)
_ALL_UNITS: tuple[UnitDef, ...] = tuple(u for c in _CATEGORIES for u in c.units)
