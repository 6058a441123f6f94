import asyncio

from typer.testing import CliRunner

from formsmith.cli import cli
from formsmith.repo_json import JSONStorage

runner = CliRunner()


def test_summary_prints_totals(monkeypatch, tmp_path):
    path = tmp_path / "jsonstore.json"
    store = JSONStorage(path)
    asyncio.run(
        store.submit(
            {
                "formId": "form-1",
                "answers": [{"label": "Name", "value": "Ann"}],
                "submittedAt": "2026-10-18T09:30:00Z",
            }
        )
    )
    monkeypatch.setenv("STORAGE_BACKEND", "json")
    monkeypatch.setenv("JSON_PATH", str(path))

    result = runner.invoke(cli, ["summary"])

    assert result.exit_code == 0
    assert "Total responses: 1" in result.output
    assert "Unique forms: 1" in result.output
    assert "Last submitted at: 2026-10-18T09:30:00Z" in result.output
    assert "Name: Ann" in result.output


def test_summary_with_no_responses(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_BACKEND", "json")
    monkeypatch.setenv("JSON_PATH", str(tmp_path / "jsonstore.json"))

    result = runner.invoke(cli, ["summary"])

    assert result.exit_code == 0
    assert "Total responses: 0" in result.output
    assert "Last submitted at: N/A" in result.output
