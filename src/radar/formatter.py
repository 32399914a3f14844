# src/radar/formatter.py

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Union

from core.logging.logger import get_logger
from radar.language_filter import language_stats
from radar.models import AnalysisResult, ScoredRecord


class RadarFormatter:
    """
    AnalysisResult -> personalized Markdown report
    """

    def __init__(
        self,
        target_languages: Sequence[str] = (),
        keywords: Sequence[str] = (),
        min_relevance_score: int = 1,
    ):
        self.target_languages = list(target_languages)
        self.keywords = list(keywords)
        self.min_relevance_score = min_relevance_score
        self.logger = get_logger(__name__)

    def select(self, records: Iterable[ScoredRecord]) -> List[ScoredRecord]:
        relevant = [r for r in records if r.relevance_score >= self.min_relevance_score]
        return sorted(relevant, key=lambda r: r.relevance_score, reverse=True)

    def format(
        self,
        analysis: Union[AnalysisResult, Iterable[ScoredRecord]],
        report_date: Optional[date] = None,
    ) -> str:
        records = analysis.records if isinstance(analysis, AnalysisResult) else analysis
        day = (report_date or date.today()).isoformat()

        relevant = self.select(records)
        if not relevant:
            return self.format_no_results(day)

        report = "\n\n".join([
            self.format_header(day, len(relevant)),
            self.format_summary(relevant),
            "\n\n---\n\n".join(self.format_repository(r) for r in relevant),
        ])
        self.logger.info(f"📝 Report generated: {len(report)} characters")
        return report

    def _languages_label(self) -> str:
        return ", ".join(self.target_languages) if self.target_languages else "All languages"

    def _keywords_label(self) -> str:
        return ", ".join(self.keywords) or "None specified"

    def format_no_results(self, day: str) -> str:
        return f"""## 🎯 Personalized GitHub Radar - {day}

**No relevant repositories found today.**

Your radar is configured to monitor:
- **Languages:** {self._languages_label()}
- **Topics:** {self._keywords_label()}

Try adjusting your topic keywords or check back tomorrow for new trending repositories!"""

    def format_header(self, day: str, count: int) -> str:
        return f"""## 🎯 Personalized GitHub Radar - {day}

**{count} relevant repositories** matching your interests today!

### 📊 Radar Configuration
- **Target Languages:** {self._languages_label()}
- **Topic Keywords:** {self._keywords_label()}
- **Minimum Relevance Score:** {self.min_relevance_score}"""

    def format_summary(self, records: Sequence[ScoredRecord]) -> str:
        summarized = sum(1 for r in records if r.ai_summary)
        top_keywords = top_keywords_of(records)[:5]
        languages = ", ".join(f"{lang} ({count})" for lang, count in language_stats(records).items())

        return f"""### 📈 Summary

- **Total Relevant:** {len(records)} repositories
- **AI Summarized:** {summarized} repositories
- **Top Keywords:** {', '.join(top_keywords)}
- **Language Distribution:** {languages}"""

    def format_repository(self, record: ScoredRecord) -> str:
        stars_added = f" **+{record.stars_added}** stars today" if record.stars_added else ""
        language = f" • {record.language}" if record.language else ""
        title = record.name.replace("/", " / ")

        lines = [
            f"### {relevance_marker(record.relevance_score)} [{title}]({record.url}){stars_added}{language}",
            "",
            f"**Relevance Score:** {record.relevance_score}",
            f"**Matched Keywords:** {', '.join(record.matched_keywords) or 'None'}",
            "",
            record.description or "No description available.",
        ]

        if record.ai_summary:
            lines += ["", f"🤖 **AI Insight:** {record.ai_summary}"]

        if record.topics:
            lines += ["", "🏷️ **Topics:** " + " ".join(f"`{topic}`" for topic in record.topics)]

        stars = record.stars_count if record.stars_count is not None else record.stars
        forks = record.forks_count if record.forks_count is not None else record.forks
        lines += ["", f"⭐ **Stars:** {stars} • 🍴 **Forks:** {forks}"]

        return "\n".join(lines)


def relevance_marker(score: int) -> str:
    if score >= 10:
        return "🔥"
    if score >= 5:
        return "⭐"
    if score >= 3:
        return "📈"
    return "📊"


def top_keywords_of(records: Iterable[ScoredRecord]) -> List[str]:
    """Matched keywords ordered by how many records matched them"""
    counts: Dict[str, int] = {}
    for record in records:
        for keyword in record.matched_keywords:
            counts[keyword] = counts.get(keyword, 0) + 1
    return [keyword for keyword, _ in sorted(counts.items(), key=lambda item: item[1], reverse=True)]
