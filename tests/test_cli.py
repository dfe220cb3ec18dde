import json

from typer.testing import CliRunner

from proptrack_cli import app
from fixtures.properties import owner_home, rental_condo

runner = CliRunner()


def _write(tmp_path, records):
    path = tmp_path / "props.json"
    path.write_text(json.dumps([r.model_dump(mode="json") for r in records]), encoding="utf-8")
    return path


def test_project_prints_requested_years(tmp_path):
    path = _write(tmp_path, [rental_condo()])
    result = runner.invoke(app, ["project", str(path), "--year", "0", "--year", "5"])
    assert result.exit_code == 0, result.output
    assert "market_value" in result.output


def test_project_requires_single_property(tmp_path):
    path = _write(tmp_path, [rental_condo(), owner_home()])
    result = runner.invoke(app, ["project", str(path)])
    assert result.exit_code != 0


def test_roi_outputs_json(tmp_path):
    path = _write(tmp_path, [rental_condo()])
    result = runner.invoke(app, ["roi", str(path), "--current-year", "2024"])
    assert result.exit_code == 0, result.output
    body = json.loads(result.output)
    assert body["true_roi"]["annualized_roi"] == 7.07


def test_mirr_lists_horizons(tmp_path):
    path = _write(tmp_path, [rental_condo()])
    result = runner.invoke(app, ["mirr", str(path), "--as-of", "2024-06-01"])
    assert result.exit_code == 0, result.output
    assert "purchase_to_today" in result.output
    assert "today_plus_40y" in result.output


def test_portfolio_summary(tmp_path):
    path = _write(tmp_path, [rental_condo(), owner_home()])
    result = runner.invoke(app, ["portfolio", str(path), "--current-year", "2024"])
    assert result.exit_code == 0, result.output
    assert "Properties:        2" in result.output


def test_inflation_factor():
    result = runner.invoke(app, ["inflation", "2023", "--current-year", "2024"])
    assert result.exit_code == 0, result.output
    assert "x1.032" in result.output


def test_timeseries_prints_net_gain(tmp_path):
    path = _write(tmp_path, [rental_condo()])
    result = runner.invoke(app, ["timeseries", str(path), "--target-year", "3"])
    assert result.exit_code == 0, result.output
    assert "net_gain" in result.output
