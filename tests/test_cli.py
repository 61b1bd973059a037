"""
Tests for the propsim command line.
"""

import json

import pytest

from propsim.cli import EXIT_INPUT_ERROR, EXIT_OK, build_parser, main


@pytest.fixture
def props_file(tmp_path):
    path = tmp_path / "props.json"
    path.write_text(json.dumps([
        {
            "player_name": "X",
            "stat_type": "points",
            "line_value": 20,
            "over_under": "over",
            "platform": "DraftKings",
            "odds_or_payout": -110,
            "calibration": {
                "player_recent_avg": 25,
                "player_recent_std": 5,
                "player_season_avg": 22,
                "home_game": True,
                "opponent_def_tier": "low",
                "pace_tier": "fast",
                "minutes_trend": "up",
            },
        },
        {
            "player_name": "Y",
            "stat_type": "rebounds",
            "line_value": 10,
            "over_under": "over",
            "platform": "PrizePicks",
            "odds_or_payout": 0,
        },
        {
            "player_name": "Z",
            "stat_type": "assists",
            "line_value": 10,
            "over_under": "over",
            "platform": "PrizePicks",
            "odds_or_payout": 0,
        },
    ]))
    return path


@pytest.fixture
def lines_file(tmp_path):
    path = tmp_path / "lines.json"
    path.write_text(json.dumps({"lines": [
        {
            "id": 1,
            "platform": "DraftKings",
            "sport": "NBA",
            "event": "LAL @ BOS",
            "market_type": "player_prop",
            "player_name": "LeBron James",
            "stat_type": "points",
            "line_value": 25.5,
            "over_under": "over",
            "odds_or_payout": -115,
        },
        {
            "id": 2,
            "platform": "DraftKings",
            "sport": "NBA",
            "event": "LAL @ BOS",
            "market_type": "spread",
            "line_value": -4.5,
        },
    ]}))
    return path


def _run(capsys, argv):
    code = main(argv)
    return code, capsys.readouterr().out


class TestParser:

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_compare_requires_odds(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["compare", "props.json"])

    def test_repeatable_filters(self):
        args = build_parser().parse_args(
            ["batch", "lines.json", "--platform", "A", "--platform", "B", "--market-type", "player_prop"]
        )
        assert args.platform == ["A", "B"]
        assert args.market_type == ["player_prop"]


class TestCommands:

    def test_prop(self, capsys, props_file):
        code, out = _run(capsys, ["prop", str(props_file)])
        assert code == EXIT_OK
        results = json.loads(out)
        assert len(results) == 3
        assert results[0]["result"]["recommendation"] == "strong_play"
        assert results[0]["result"]["edge"] == 12.6
        assert results[0]["confidence_label"] == "high"
        assert results[1]["result"]["recommendation"] == "pass"
        assert results[1]["confidence_label"] == "low"

    def test_batch(self, capsys, lines_file):
        code, out = _run(capsys, ["batch", str(lines_file)])
        assert code == EXIT_OK
        payload = json.loads(out)
        assert payload["summary"]["total_bets"] == 1
        assert payload["skipped"] == 1
        assert payload["bets"][0]["market_line_id"] == "1"
        assert payload["bets"][0]["bet_type"] == "LeBron James over 25.5 points"

    def test_batch_platform_filter(self, capsys, lines_file):
        code, out = _run(capsys, ["batch", str(lines_file), "--platform", "FanDuel"])
        assert code == EXIT_OK
        assert json.loads(out)["bets"] == []

    def test_entry_power(self, capsys, props_file):
        code, out = _run(capsys, ["entry", str(props_file)])
        assert code == EXIT_OK
        payload = json.loads(out)
        assert payload["mode"] == "power"
        assert payload["payout"]["multiplier"] == 5
        assert len(payload["legs"]) == 3
        # 0.65 * 0.5 * 0.5
        assert payload["entry"]["combined_probability"] == 0.1625

    def test_entry_flex(self, capsys, props_file):
        code, out = _run(capsys, ["entry", str(props_file), "--mode", "flex", "--platform", "underdog"])
        assert code == EXIT_OK
        entry = json.loads(out)["entry"]
        assert [s["correct"] for s in entry["scenario_payouts"]] == [3, 2]

    def test_compare(self, capsys, props_file):
        code, out = _run(capsys, ["compare", str(props_file), "--sportsbook-odds", "120"])
        assert code == EXIT_OK
        rows = json.loads(out)
        assert rows[1]["player_name"] == "Y"
        assert rows[1]["best_venue"] == "sportsbook"
        assert rows[1]["reasoning"] == "Sportsbook offers 7.1% better edge"


class TestInputErrors:

    def test_missing_file(self, capsys, tmp_path):
        code, out = _run(capsys, ["prop", str(tmp_path / "missing.json")])
        assert code == EXIT_INPUT_ERROR
        assert out == ""

    def test_invalid_json(self, capsys, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert _run(capsys, ["prop", str(path)])[0] == EXIT_INPUT_ERROR

    def test_invalid_record(self, capsys, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"player_name": "X", "over_under": "sideways"}]))
        assert _run(capsys, ["prop", str(path)])[0] == EXIT_INPUT_ERROR

    def test_wrong_shape(self, capsys, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"rows": []}))
        assert _run(capsys, ["batch", str(path)])[0] == EXIT_INPUT_ERROR
