import json

from finpulse.pipelines.analysis_run import run_analysis
from finpulse.providers.base import CompanyDataProvider
from finpulse.providers.mock_provider import MockCompanyDataProvider


class _StaticProvider(CompanyDataProvider):
    def __init__(self, companies):
        self.companies = companies

    def get_companies(self, tickers):
        return [c for c in self.companies if c.ticker in tickers]


class _BrokenProvider(CompanyDataProvider):
    def get_companies(self, tickers):
        raise RuntimeError("upstream unavailable")


def test_run_with_mock_provider(tmp_path):
    report = run_analysis(["AAA", "BBB", "CCC", "DDD", "EEE"], MockCompanyDataProvider(), output_dir=str(tmp_path))

    assert report["status"] == "ok"
    assert [d["stage"] for d in report["diagnostics"]] == ["company_data", "analysis", "sector_ranking", "screens"]
    assert [a["ticker"] for a in report["analyses"]] == ["AAA", "BBB", "CCC", "DDD", "EEE"]
    assert len(report["sector_ranking"]) == 4

    saved = json.loads(open(report["file"], encoding="utf-8").read())
    assert saved["status"] == "ok"
    assert len(saved["analyses"]) == 5


def test_run_without_output_dir_writes_nothing(tmp_path, population):
    report = run_analysis(["GROW", "DEBT", "BANK", "SOFT"], _StaticProvider(population))
    assert "file" not in report
    assert report["screens"] == {
        "undervalued": ["GROW"],
        "overvalued": ["DEBT"],
        "growth_leaders": ["GROW", "BANK"],
        "stable": ["BANK"],
    }
    analysis = report["diagnostics"][1]
    assert analysis["meta"]["categories"] == {"undervalued": 1, "overvalued": 1, "growth": 1, "neutral": 1}


def test_provider_failure_marks_run_failed():
    report = run_analysis(["AAA"], _BrokenProvider())
    assert report["status"] == "failed"
    assert report["failed_stage"] == "company_data"
    assert report["diagnostics"][0]["error"] == "upstream unavailable"
    assert report["analyses"] == []
    assert report["sector_ranking"] == []


def test_failing_sector_stage_degrades_run(population, monkeypatch):
    def boom(self):
        raise ZeroDivisionError("no sectors")

    monkeypatch.setattr("finpulse.engine.AnalysisEngine.sector_ranking", boom)
    report = run_analysis(["GROW", "DEBT", "BANK", "SOFT"], _StaticProvider(population))

    assert report["status"] == "degraded"
    stage = report["diagnostics"][2]
    assert stage["stage"] == "sector_ranking"
    assert stage["status"] == "warning"
    assert stage["error_type"] == "ZeroDivisionError"
    assert report["sector_ranking"] == []
    assert report["screens"]["overvalued"] == ["DEBT"]
