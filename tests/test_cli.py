import json

from rstable import cli
from rstable.core.errors import FetchFailure
from rstable.domain.models import Coordinates, RestaurantRecord


def _records():
    return [
        RestaurantRecord(id="b", name="Beta", address="Calle 2", coordinates=Coordinates(lat=41.40, lng=2.17)),
        RestaurantRecord(id="a", name="Alpha", address="Calle 1", comments="tapas"),
    ]


def test_table_sorts_like_header_clicks(monkeypatch, capsys):
    monkeypatch.setattr(cli, "fetch_restaurants", lambda *_a, **_k: _records())

    assert cli.main(["table", "--sort", "name", "--json"]) == 0
    assert [r["id"] for r in json.loads(capsys.readouterr().out)] == ["a", "b"]

    assert cli.main(["table", "--sort", "name", "--sort", "name", "--json"]) == 0
    assert [r["id"] for r in json.loads(capsys.readouterr().out)] == ["b", "a"]


def test_table_search_and_distance(monkeypatch, capsys):
    monkeypatch.setattr(cli, "fetch_restaurants", lambda *_a, **_k: _records())

    assert cli.main(["table", "--search", "calle", "--sort", "distance", "--lat", "41.3874", "--lng", "2.1686"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0].startswith("Visitado")
    assert "Distancia ▲" in lines[0]
    assert "Beta" in lines[2] and " m " in lines[2]
    assert "Alpha" in lines[3] and "N/A" in lines[3]
    assert "2 of 2 restaurants" in out


def test_table_survives_fetch_failure(monkeypatch, capsys):
    def fail(*_a, **_k):
        raise FetchFailure("GET http://localhost:3001/api/restaurants returned HTTP 500")

    monkeypatch.setattr(cli, "fetch_restaurants", fail)
    assert cli.main(["table"]) == 0
    assert "0 of 0 restaurants" in capsys.readouterr().out


def test_sync_sheets_reads_local_csv(tmp_path, capsys):
    src = tmp_path / "sheet.csv"
    src.write_text("id,name,address,lat,lng\nx,Uno,Calle 1,41.1,2.1\n", encoding="utf-8")
    out = tmp_path / "restaurants.json"

    assert cli.main(["sync-sheets", "--csv", str(src), "--out", str(out)]) == 0
    assert "Successfully synced 1 restaurants." in capsys.readouterr().out
    assert json.loads(out.read_text(encoding="utf-8"))[0]["name"] == "Uno"


def test_sync_sheets_missing_source_exits_non_zero(tmp_path):
    assert cli.main(["sync-sheets", "--csv", str(tmp_path / "missing.csv"), "--out", str(tmp_path / "o.json")]) == 1


def test_update_locations_missing_file_exits_non_zero(tmp_path):
    assert cli.main(["update-locations", "--data", str(tmp_path / "missing.json")]) == 1
