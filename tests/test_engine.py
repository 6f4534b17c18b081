#
# Panel Units - Conversion Engine Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
import time
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from fractions import Fraction

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from panelunits.categories import CategoryName
from panelunits.engine import (
    ConversionRequest, FACTOR_LOOKUP_ORDER, PRIORITY_LOOKUP,
    convert, convert_many, convert_request, engine_conf, is_boolean_unit, resolve_factor,
)
from panelunits.registry import get_category, list_categories
from panelunits.sentinels import NOT_FOUND

FACTOR_UNITS = [
    pytest.param(u.id, id=f"{c.name.value}-{u.id}")
    for c in list_categories() for u in c if u.factor is not None
]

BASE_ROUND_TRIPS = [
    pytest.param(u.id, c.base, id=f"{c.name.value}-{u.id}")
    for c in list_categories() if c.base is not None for u in c if u.factor is not None
]

BOOLEAN_UNITS = [pytest.param(u.id, id=u.id) for u in get_category("Boolean")]


# Tests ----------------------------------------------------------------------------------------------------------------

class TestConvertScale:

    @pytest.mark.parametrize(
        ("value", "source", "target", "expected"),
        [
            pytest.param(1, "kibibytes", "bytesIEC", 1024, id="kibibytes-bytes"),
            pytest.param(1000, "milliseconds", "seconds", 1, id="ms-s"),
            pytest.param(1, "hours", "seconds", 3600, id="h-s"),
            pytest.param(1, "gigabitsPerSecSI", "megabitsPerSecSI", 1000, id="gbps-mbps"),
            pytest.param(1, "pebibytes", "kibibytes", 1024 ** 4, id="pib-kib"),
            pytest.param(1, "petabytes", "bytesSI", 10 ** 15, id="pb-bytes"),
            pytest.param(8, "bitsIEC", "bytesIEC", 1, id="bits-bytes"),
            pytest.param(1, "mebibitsPerSecIEC", "kibibytesPerSecIEC", 128, id="mibps-kibps"),
            pytest.param(120, "countsPerMin", "countsPerSec", 2, id="cpm-cps"),
            pytest.param(0.25, "percentUnit", "percent", 25, id="ratio-percent"),
            pytest.param(2, "days", "hours", 48, id="days-hours"),
            pytest.param(1, "mile", "foot", 5280, id="mile-feet"),
            pytest.param(1, "kilowattHour", "joule", 3_600_000, id="kwh-j"),
            pytest.param(90, "degree", "gradian", 100, id="deg-grad"),
            pytest.param(36, "kilometersPerHour", "metersPerSecond", 10, id="kmh-ms"),
            pytest.param(1, "mbtc", "ubtc", 1000, id="mbtc-ubtc"),
        ],
    )
    def test_literal(self, value, source, target, expected):
        result = convert(value, source, target)
        assert result == expected
        assert isinstance(result, int)

    @pytest.mark.parametrize(
        ("value", "source", "target", "expected"),
        [
            pytest.param(1500, "milliseconds", "seconds", 1.5, id="ms-s"),
            pytest.param(1, "bitsSI", "bytesSI", 0.125, id="bit-byte"),
            pytest.param(1, "nanoseconds", "seconds", 1e-9, id="ns-s"),
            pytest.param(1, "countsPerSec", "countsPerMin", 60, id="cps-cpm"),
            pytest.param(1, "hours", "days", 1 / 24, id="h-d"),
        ],
    )
    def test_fractional(self, value, source, target, expected):
        assert convert(value, source, target) == expected

    @pytest.mark.parametrize(
        ("value", "source", "target", "expected"),
        [
            pytest.param(0.1, "seconds", "milliseconds", 100, id="0.1s"),
            pytest.param(0.3, "seconds", "milliseconds", 300, id="0.3s"),
            pytest.param(1.1, "kilobytes", "bytesSI", 1100, id="1.1kB"),
            pytest.param(4.35, "gigabytes", "megabytes", 4350, id="4.35GB"),
            pytest.param(1e-9, "petabytes", "bytesSI", 1_000_000, id="nano-peta"),
        ],
    )
    def test_no_float_drift(self, value, source, target, expected):
        """Decimal inputs scale without binary rounding artefacts."""
        assert convert(value, source, target) == expected

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(Decimal("1.5"), id="decimal"),
            pytest.param(Fraction(3, 2), id="fraction"),
            pytest.param("1.5", id="str"),
            pytest.param(1.5, id="float"),
        ],
    )
    def test_value_types(self, value):
        assert convert(value, "kibibytes", "bytesIEC") == 1536

    def test_cross_category_not_detected(self):
        assert convert(1, "hours", "kibibytes") == 3600 / 1024


class TestConvertProperties:

    @pytest.mark.parametrize("unit_id", FACTOR_UNITS)
    @pytest.mark.parametrize("value", [0, 1, 2.5, -7, 1e-9, 123456789])
    def test_identity(self, unit_id, value):
        assert convert(value, unit_id, unit_id) == value

    @pytest.mark.parametrize(("unit_id", "base"), BASE_ROUND_TRIPS)
    @pytest.mark.parametrize("value", [1, 0.001, 42.42, -3.5e6])
    def test_round_trip_via_base(self, unit_id, base, value):
        there = convert(value, unit_id, base)
        back = convert(there, base, unit_id)
        assert back == pytest.approx(value, rel=1e-12)

    @pytest.mark.parametrize("source", BOOLEAN_UNITS)
    @pytest.mark.parametrize("value", [0, 1, -5, 3.3, float("nan"), "abc", None])
    @pytest.mark.parametrize("target", ["seconds", "not-a-real-unit", None, "yesNo"])
    def test_boolean_short_circuit(self, source, value, target):
        assert convert(value, source, target) == 1

    @pytest.mark.parametrize("value", [0, 1, -1, 2.5, 1e15])
    def test_unresolvable_source(self, value):
        assert convert(value, "not-a-real-unit", "seconds") == 0

    @pytest.mark.parametrize(
        ("source", "target"),
        [
            pytest.param("seconds", "not-a-real-unit", id="unknown-target"),
            pytest.param("seconds", None, id="no-target"),
            pytest.param(None, "seconds", id="no-source"),
            pytest.param(None, None, id="no-units"),
            pytest.param("celsius", "kelvin", id="no-factor"),
            pytest.param("seconds", "dateTimeIso", id="no-factor-target"),
        ],
    )
    def test_missing_factor_is_zero(self, source, target):
        assert convert(10, source, target) == 0

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(float("nan"), id="nan"),
            pytest.param(float("inf"), id="inf"),
            pytest.param(-math.inf, id="-inf"),
            pytest.param(Decimal("NaN"), id="decimal-nan"),
            pytest.param("abc", id="str"),
            pytest.param(None, id="none"),
            pytest.param([1], id="list"),
        ],
    )
    def test_invalid_value_is_zero(self, value):
        assert convert(value, "seconds", "milliseconds") == 0

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(Decimal("1e50000000"), id="decimal-huge"),
            pytest.param("1e50000000", id="str-huge"),
            pytest.param(Decimal("-1e999999999"), id="decimal-huge-negative"),
            pytest.param("1e-50000000", id="str-tiny"),
            pytest.param(Decimal("1e-999999999"), id="decimal-tiny"),
        ],
    )
    def test_extreme_exponent_answers_quickly(self, value):
        start = time.perf_counter()
        assert convert(value, "seconds", "milliseconds") == 0
        assert time.perf_counter() - start < 1.0

    def test_long_digit_string_answers_quickly(self):
        start = time.perf_counter()
        result = convert("0." + "1" * 1_000_000, "seconds", "milliseconds")
        assert time.perf_counter() - start < 1.0
        assert result == pytest.approx(111.111111111111)

    def test_never_raises(self):
        samples = [None, "", "seconds", "trueFalse", "hertz", 42, ["x"]]
        for source in samples:
            for target in samples:
                result = convert(3, source, target)
                assert isinstance(result, (int, float))


class TestLookup:

    def test_priority_order(self):
        names = [c.name for c in PRIORITY_LOOKUP]
        assert names == [
            CategoryName.DATA,
            CategoryName.TIME,
            CategoryName.DATA_RATE,
            CategoryName.MISCELLANEOUS,
            CategoryName.THROUGHPUT,
        ]

    def test_full_order(self):
        assert FACTOR_LOOKUP_ORDER[:5] == PRIORITY_LOOKUP
        names = [c.name for c in FACTOR_LOOKUP_ORDER]
        assert len(names) == len(set(names))
        assert CategoryName.BOOLEAN not in names
        assert CategoryName.TEMPERATURE not in names
        assert CategoryName.MASS in names

    def test_resolve_factor(self):
        assert resolve_factor("minutes") == 60
        assert resolve_factor("kilogram") == 1
        assert resolve_factor("celsius") is NOT_FOUND
        assert resolve_factor("not-a-real-unit") is NOT_FOUND
        assert resolve_factor(None) is NOT_FOUND

    def test_resolve_factor_scoped(self):
        assert resolve_factor("kilogram", lookup=PRIORITY_LOOKUP) is NOT_FOUND

    def test_priority_categories_read_at_call_time(self, monkeypatch):
        monkeypatch.setattr(engine_conf, "PRIORITY_CATEGORIES", (CategoryName.MASS, CategoryName.TIME))
        assert convert(1, "kilogram", "gram", legacy_target_lookup=True) == 1000
        assert convert(1, "kibibytes", "bytesIEC", legacy_target_lookup=True) == 0
        assert convert(1, "kibibytes", "bytesIEC") == 1024

    def test_priority_categories_default_chain_unchanged(self, monkeypatch):
        monkeypatch.setattr(engine_conf, "PRIORITY_CATEGORIES", (CategoryName.MASS,))
        assert resolve_factor("kilogram", lookup=PRIORITY_LOOKUP) is NOT_FOUND
        assert resolve_factor("kilogram") == 1

    @pytest.mark.parametrize(
        "priority",
        [
            pytest.param((), id="empty"),
            pytest.param(("Nope", CategoryName.TIME), id="unknown-name"),
            pytest.param([CategoryName.TIME, CategoryName.TIME], id="list-repeated"),
        ],
    )
    def test_priority_categories_tolerated(self, monkeypatch, priority):
        monkeypatch.setattr(engine_conf, "PRIORITY_CATEGORIES", priority)
        assert convert(1, "hours", "seconds") == 3600
        assert isinstance(convert(1, "hours", "seconds", legacy_target_lookup=True), int)

    def test_colliding_id_uses_first_category(self):
        assert resolve_factor("hertz") == get_category("Time").factor_of("hertz")
        assert convert(60, "revolutionsPerMinute", "hertz") == 1

    @pytest.mark.parametrize("unit_id", ["trueFalse", "yesNo", "onOff"])
    def test_is_boolean_unit(self, unit_id):
        assert is_boolean_unit(unit_id)

    @pytest.mark.parametrize("unit_id", ["seconds", "True / False", None, "", 1])
    def test_is_not_boolean_unit(self, unit_id):
        assert not is_boolean_unit(unit_id)


class TestLegacyTargetLookup:
    """The historic target lookup queried the last priority table with the source unit."""

    def test_corrected_by_default(self):
        assert convert(60, "countsPerMin", "countsPerSec") == 1

    def test_legacy_uses_source_for_last_table(self):
        assert convert(60, "countsPerMin", "countsPerSec", legacy_target_lookup=True) == 60

    def test_legacy_target_missing_from_source(self):
        assert convert(1, "seconds", "countsPerSec", legacy_target_lookup=True) == 0
        assert convert(1, "seconds", "countsPerSec") == 1

    def test_legacy_only_priority_tables(self):
        assert convert(1, "kilogram", "gram", legacy_target_lookup=True) == 0
        assert convert(1, "kilogram", "gram") == 1000

    def test_legacy_unaffected_when_target_found_early(self):
        assert convert(1, "hours", "seconds", legacy_target_lookup=True) == 3600

    def test_conf_default(self, legacy_lookup):
        assert convert(60, "countsPerMin", "countsPerSec") == 60
        assert convert(60, "countsPerMin", "countsPerSec", legacy_target_lookup=False) == 1


class TestConvertRequest:

    def test_request(self):
        request = ConversionRequest(value=1, source_unit="hours", target_unit="seconds")
        assert convert_request(request) == 3600

    def test_request_defaults(self):
        assert convert_request(ConversionRequest(value=5)) == 0

    @pytest.mark.parametrize(
        "data",
        [
            pytest.param({"value": 1, "sourceUnit": "kibibytes", "targetUnit": "bytesIEC"}, id="camel"),
            pytest.param({"value": 1, "source_unit": "kibibytes", "target_unit": "bytesIEC"}, id="snake"),
        ],
    )
    def test_from_mapping(self, data):
        request = ConversionRequest.from_mapping(data)
        assert request == ConversionRequest(1, "kibibytes", "bytesIEC")
        assert convert_request(request) == 1024

    def test_from_mapping_missing_keys(self):
        request = ConversionRequest.from_mapping({})
        assert request == ConversionRequest(None, None, None)
        assert convert_request(request) == 0

    def test_legacy_passthrough(self):
        request = ConversionRequest(60, "countsPerMin", "countsPerSec")
        assert convert_request(request, legacy_target_lookup=True) == 60


class TestConvertMany:

    def test_series(self):
        assert convert_many([1, 2, "x", 0.5], "kibibytes", "bytesIEC") == [1024, 2048, 0, 512]

    def test_matches_convert(self):
        values = [0, 1.25, -3, 1e-6, Decimal("2.5")]
        expected = [convert(v, "minutes", "milliseconds") for v in values]
        assert convert_many(values, "minutes", "milliseconds") == expected

    def test_boolean(self):
        assert convert_many([0, 5, None], "yesNo", "seconds") == [1, 1, 1]

    def test_generator(self):
        assert convert_many((v for v in range(3)), "hours", "minutes") == [0, 60, 120]

    def test_unknown(self):
        assert convert_many([1, 2], "nope", "seconds") == [0, 0]

    @pytest.mark.parametrize("values", [None, 5, 2.5], ids=["none", "int", "float"])
    @pytest.mark.parametrize("source", ["kibibytes", "yesNo"])
    def test_not_iterable(self, values, source):
        assert convert_many(values, source, "bytesIEC") == []


class TestLogging:

    def test_unresolved_unit_logged(self, engine_log):
        convert(1, "not-a-real-unit", "seconds")
        messages = [r.getMessage() for r in engine_log.records]
        assert any("not-a-real-unit" in m for m in messages)

    def test_invalid_value_logged(self, engine_log):
        convert("abc", "seconds", "minutes")
        assert any("'abc'" in r.getMessage() for r in engine_log.records)

    def test_success_quiet(self, engine_log):
        convert(1, "seconds", "minutes")
        assert engine_log.records == []


class TestConcurrency:

    def test_parallel_readers(self):
        pairs = [("hours", "seconds"), ("kibibytes", "bytesIEC"), ("gigabitsPerSecSI", "megabitsPerSecSI")] * 200
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda p: convert(1, *p), pairs))
        assert results == [3600, 1024, 1000] * 200
