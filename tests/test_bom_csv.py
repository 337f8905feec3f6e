import io
from datetime import date

import pytest

from rwh.errors import InvalidInput
from rwh.io import read_bom_csv

HEADER = (
    "Product code,Bureau of Meteorology station number,Year,Month,Day,"
    "Rainfall amount (millimetres),Period over which rainfall was measured (days),Quality\n"
)


def _csv(rows):
    return io.StringIO(HEADER + "".join(r + "\n" for r in rows))


def test_reads_rows_sorted_with_missing_days():
    res = read_bom_csv(
        _csv(
            [
                "IDCJAC0009,070351,2016,03,19,,,",
                "IDCJAC0009,070351,2016,03,18,7.4,1,N",
                "IDCJAC0009,070351,2016,03,20,0,1,Y",
            ]
        )
    )
    s = res.series
    assert [o.date for o in s] == [date(2016, 3, 18), date(2016, 3, 19), date(2016, 3, 20)]
    assert [o.missing for o in s] == [False, True, False]
    assert s[0].rainfall_mm == 7.4
    assert s[0].quality == "N"
    assert res.station == "070351"
    assert res.product_code == "IDCJAC0009"
    assert any("Less than 1 year" in w for w in res.warnings)
    assert any("missing data" in w for w in res.warnings)


def test_bad_rows_are_skipped_with_warning():
    res = read_bom_csv(
        _csv(
            [
                "IDCJAC0009,070351,2016,02,30,1.0,1,Y",
                "IDCJAC0009,070351,2016,03,01,-2,1,Y",
                "IDCJAC0009,070351,2016,03,02,abc,1,Y",
                "IDCJAC0009,070351,1700,03,03,1.0,1,Y",
                "IDCJAC0009,070351,2016,03,04,1.0,1,Y",
                "IDCJAC0009,070351,2016,03,04,2.0,1,Y",
            ]
        )
    )
    assert len(res.series) == 1
    assert res.series[0].rainfall_mm == 1.0
    joined = " | ".join(res.warnings)
    assert "Row 2: Invalid date: 2016-2-30" in joined
    assert "Negative rainfall" in joined
    assert "Invalid rainfall value: abc" in joined
    assert "Invalid year: 1700" in joined
    assert "Duplicate date 2016-03-04" in joined


def test_rejects_wrong_header():
    with pytest.raises(InvalidInput):
        read_bom_csv(io.StringIO("a,b,c\n1,2,3\n"))


def test_rejects_file_without_valid_rows():
    with pytest.raises(InvalidInput):
        read_bom_csv(_csv(["IDCJAC0009,070351,2016,13,01,1.0,1,Y"]))
