from datetime import date

from radar.formatter import RadarFormatter, relevance_marker, top_keywords_of
from radar.models import AnalysisResult, RunStats, ScoredRecord


REPORT_DATE = date(2024, 5, 1)


def make_scored(name, score, keywords=("AI",), **overrides):
    fields = {
        "name": name,
        "url": f"https://github.com/{name}",
        "language": "Python",
        "description": "An AI agent framework",
        "relevance_score": score,
        "matched_keywords": keywords,
    }
    fields.update(overrides)
    return ScoredRecord(**fields)


def make_formatter(**overrides):
    options = {"target_languages": ["Python"], "keywords": ["AI", "LLM"], "min_relevance_score": 3}
    options.update(overrides)
    return RadarFormatter(**options)


class TestSelect:
    def test_threshold_and_sort(self):
        records = [make_scored("a/a", 3), make_scored("b/b", 1), make_scored("c/c", 12)]
        selected = make_formatter().select(records)
        assert [r.name for r in selected] == ["c/c", "a/a"]


class TestFormat:
    def test_no_results(self):
        report = make_formatter(target_languages=[], keywords=[]).format([], report_date=REPORT_DATE)
        assert "No relevant repositories found today." in report
        assert "**Languages:** All languages" in report
        assert "**Topics:** None specified" in report
        assert "2024-05-01" in report

    def test_header_summary_and_sections(self):
        records = (
            make_scored("openai/agents", 12, ("AI", "LLM"), stars_added=42, ai_summary="Builds LLM agents."),
            make_scored("rust-lang/bci", 5, ("AI",), language="Rust", topics=("bci", "ml")),
        )
        result = AnalysisResult(records=records, stats=RunStats(total_input=2, total_filtered=2, total_analyzed=2))
        report = make_formatter().format(result, report_date=REPORT_DATE)

        assert "**2 relevant repositories** matching your interests today!" in report
        assert "- **Target Languages:** Python" in report
        assert "- **Minimum Relevance Score:** 3" in report
        assert "- **AI Summarized:** 1 repositories" in report
        assert "- **Top Keywords:** AI, LLM" in report
        assert "- **Language Distribution:** Python (1), Rust (1)" in report
        assert "### 🔥 [openai / agents](https://github.com/openai/agents) **+42** stars today • Python" in report
        assert "🤖 **AI Insight:** Builds LLM agents." in report
        assert "🏷️ **Topics:** `bci` `ml`" in report
        assert report.index("openai / agents") < report.index("rust-lang / bci")
        assert "\n\n---\n\n" in report

    def test_enriched_counters_preferred(self):
        record = make_scored("a/a", 5, stars=10, forks=2, stars_count=1500, forks_count=230)
        report = make_formatter().format([record], report_date=REPORT_DATE)
        assert "⭐ **Stars:** 1500 • 🍴 **Forks:** 230" in report

    def test_falls_back_to_trending_counters(self):
        record = make_scored("a/a", 5, stars=10, forks=2)
        report = make_formatter().format([record], report_date=REPORT_DATE)
        assert "⭐ **Stars:** 10 • 🍴 **Forks:** 2" in report

    def test_missing_description(self):
        record = make_scored("a/a", 5, description=None)
        report = make_formatter().format([record], report_date=REPORT_DATE)
        assert "No description available." in report


class TestHelpers:
    def test_relevance_marker(self):
        assert relevance_marker(10) == "🔥"
        assert relevance_marker(5) == "⭐"
        assert relevance_marker(3) == "📈"
        assert relevance_marker(1) == "📊"

    def test_top_keywords_by_frequency(self):
        records = [
            make_scored("a/a", 5, ("LLM", "AI")),
            make_scored("b/b", 5, ("AI",)),
        ]
        assert top_keywords_of(records) == ["AI", "LLM"]
