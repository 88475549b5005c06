"""Tests for the bomwater command line."""

import json

import httpx
import pytest

from bomwater.__main__ import build_parser, main
from bomwater.client import BomWaterClient


def make_client(body, seen=None, status=200):
    def handler(request):
        if seen is not None:
            seen.append(dict(request.url.params))
        return httpx.Response(status, text=body)
    return BomWaterClient(transport=httpx.MockTransport(handler))


class TestParser:

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_raw_param_needs_equals(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["raw", "--param", "request"])

    def test_repeated_stations(self):
        args = build_parser().parse_args(["stations", "--station", "410730", "--station", "410731"])
        assert args.stations == ["410730", "410731"]


class TestMain:

    def test_stations_markdown(self, station_list_body, capsys):
        seen = []
        code = main(["stations", "--station", "410730", "--station", "410731"],
                    client=make_client(station_list_body, seen))
        out = capsys.readouterr().out
        assert code == 0
        assert out.startswith("| station_name | station_no |")
        assert seen[0]["station_no"] == "410730,410731"

    def test_values_csv(self, values_body, capsys):
        seen = []
        code = main(["--format", "csv", "values", "1573010", "2020-01-01", "2020-01-02"],
                    client=make_client(values_body, seen))
        out = capsys.readouterr().out
        assert code == 0
        assert out.splitlines()[0] == "Timestamp,Value,Quality Code"
        assert seen[0]["returnfields"] == "Timestamp,Value,Quality Code"

    def test_tsid(self, timeseries_list_body, capsys):
        code = main(["tsid", "Water Course Discharge", "410730", "DMQaQc.Merged.DailyMean.24HR"],
                    client=make_client(timeseries_list_body))
        assert code == 0
        assert "1573010" in capsys.readouterr().out

    def test_raw(self, capsys):
        body = json.dumps([["parametertype_name"], ["Rainfall"]])
        seen = []
        code = main(["raw", "--param", "request=getParameterTypeList"], client=make_client(body, seen))
        assert code == 0
        assert seen[0]["request"] == "getParameterTypeList"
        assert "| Rainfall |" in capsys.readouterr().out

    def test_no_matches_exit_code(self, capsys):
        code = main(["stations", "--station", "000000"], client=make_client(json.dumps("No matches.")))
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_unsupported_raw_request(self, capsys):
        code = main(["raw", "--param", "request=getWeather"], client=make_client("[]"))
        assert code == 1
        assert "getWeather" in capsys.readouterr().err
