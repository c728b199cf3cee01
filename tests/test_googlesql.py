from datetime import date, datetime, timedelta, timezone, tzinfo
from importlib.resources import files
from zoneinfo import ZoneInfo

import pytest

from safesql import MalformedTemplate, SafeSqlError, Translator, UnsupportedType
from safesql.dialects import googlesql
from safesql.dialects.googlesql import GOOGLE_SQL, TemporalRenderer, format_local_date_time


def test_instant_renders_timestamp_in_reference_zone():
    instant = datetime(2023, 1, 1, 8, 0, tzinfo=timezone.utc)
    q = googlesql.query("SELECT * FROM t WHERE ts = {t}", instant)
    assert q.sql == "SELECT * FROM t WHERE ts = TIMESTAMP('2023-01-01T00:00:00', 'America/Los_Angeles')"


def test_instant_with_fixed_offset_converts_to_reference_zone():
    instant = datetime(2023, 7, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    q = googlesql.query("SELECT {t}", instant)
    assert q.sql == "SELECT TIMESTAMP('2023-07-01T03:00:00', 'America/Los_Angeles')"


def test_fraction_only_when_nonzero():
    instant = datetime(2023, 1, 1, 8, 0, 0, 500000, tzinfo=timezone.utc)
    assert googlesql.query("SELECT {t}", instant).sql == (
        "SELECT TIMESTAMP('2023-01-01T00:00:00.500000', 'America/Los_Angeles')"
    )
    assert format_local_date_time(datetime(2023, 1, 1, 0, 0, 0, 1)) == "2023-01-01T00:00:00.000001"
    assert format_local_date_time(datetime(2023, 1, 1)) == "2023-01-01T00:00:00"


def test_zoned_date_time_keeps_its_own_zone():
    dt = datetime(2023, 3, 5, 9, 30, tzinfo=ZoneInfo("Europe/Paris"))
    q = googlesql.query("SELECT * FROM t WHERE dt = {dt}", dt)
    assert q.sql == "SELECT * FROM t WHERE dt = DATETIME('2023-03-05T09:30:00', 'Europe/Paris')"


def test_local_date_renders_unquoted_components():
    q = googlesql.query("SELECT * FROM t WHERE d = {d}", date(2023, 3, 5))
    assert q.sql == "SELECT * FROM t WHERE d = DATE(2023, 3, 5)"


def test_dates_in_sequence():
    q = googlesql.query("WHERE d IN ({ds})", [date(2023, 1, 1), date(2023, 1, 2)])
    assert q.sql == "WHERE d IN (DATE(2023, 1, 1), DATE(2023, 1, 2))"


def test_naive_datetime_rejected():
    with pytest.raises(UnsupportedType) as exc:
        googlesql.query("SELECT {t}", datetime(2023, 1, 1))
    assert exc.value.problem.details == {"placeholder": "t", "position": 0, "type": "datetime"}


class _CustomZone(tzinfo):
    def utcoffset(self, dt):
        return timedelta(hours=1)

    def dst(self, dt):
        return timedelta(0)

    def tzname(self, dt):
        return "X'); DROP TABLE t; --"


def test_unknown_tzinfo_rejected():
    with pytest.raises(UnsupportedType):
        googlesql.query("SELECT {t}", datetime(2023, 1, 1, tzinfo=_CustomZone()))


def test_other_types_fall_back_to_base_rejection():
    with pytest.raises(UnsupportedType):
        googlesql.query("SELECT {x}", object())
    with pytest.raises(UnsupportedType, match="quoted placeholder"):
        googlesql.query("SELECT '{d}'", date(2023, 1, 1))


def test_strings_use_backslash_escaping():
    q = googlesql.query("SELECT * FROM t WHERE name = {n} AND note = {m}", "O'Brien", "a\\b\nc")
    assert q.sql == "SELECT * FROM t WHERE name = 'O\\'Brien' AND note = 'a\\\\b\\nc'"


def test_placeholder_in_double_quoted_string():
    q = googlesql.query('SELECT "{n}"', 'say "hi"')
    assert q.sql == 'SELECT "say \\"hi\\""'


def test_backtick_identifier():
    assert googlesql.query("SELECT * FROM `{table}`", "proj.ds.tbl").sql == "SELECT * FROM `proj.ds.tbl`"
    with pytest.raises(UnsupportedType, match="identifier"):
        googlesql.query("SELECT * FROM `{table}`", "t` WHERE 1=1 --")


def test_reference_zone_is_configurable():
    tr = Translator(GOOGLE_SQL, GOOGLE_SQL.unquoted_hook(ZoneInfo("UTC")))
    q = tr.translate("SELECT {t}", datetime(2023, 1, 1, 8, 0, tzinfo=timezone.utc))
    assert q.sql == "SELECT TIMESTAMP('2023-01-01T08:00:00', 'UTC')"


def test_reference_zone_needs_key():
    class Keyless:
        key = None

    with pytest.raises(ValueError, match="IANA key"):
        TemporalRenderer(Keyless())


def test_template_reuse_is_independent():
    tmpl = googlesql.template("SELECT {d}")
    assert tmpl(date(2023, 3, 5)).sql == "SELECT DATE(2023, 3, 5)"
    assert tmpl(date(2024, 12, 31)).sql == "SELECT DATE(2024, 12, 31)"


def test_escape_before_placeholder_cannot_close_string():
    with pytest.raises(MalformedTemplate, match="escape character"):
        googlesql.query(r"SELECT 'a\{x}', {y}", "'", " OR 1=1 --")


@pytest.mark.parametrize(
    "instant",
    [
        datetime(1, 1, 1, tzinfo=timezone.utc),
        datetime.max.replace(tzinfo=timezone(timedelta(hours=-12))),
    ],
)
def test_instant_out_of_range_in_reference_zone(instant):
    with pytest.raises(UnsupportedType, match="out of range") as exc:
        googlesql.query("SELECT {t}", instant)
    assert isinstance(exc.value, SafeSqlError)
    assert isinstance(exc.value.__cause__, OverflowError)


def test_zoned_date_time_without_key_rejected():
    source = files("tzdata").joinpath("zoneinfo").joinpath("Europe").joinpath("Paris")
    with source.open("rb") as f:
        keyless = ZoneInfo.from_file(f)
    assert keyless.key is None
    with pytest.raises(UnsupportedType, match="IANA key"):
        googlesql.query("SELECT {dt}", datetime(2023, 3, 5, 9, 30, tzinfo=keyless))
