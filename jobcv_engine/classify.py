"""Responsibility / requirement classification heuristics.

This module contains deterministic, bilingual (Latin and CJK script) rules that
decide whether a text fragment from a job page reads as:
- a responsibility (what the hire will do),
- a requirement (what the hire must bring),
- or noise (navigation, buttons, boilerplate).

The rules live in named tables below so they can be tested and extended per
locale without touching control flow. Order of evaluation:

1. length window, then noise patterns (always Noise);
2. qualification patterns (always Requirement, even after a leading verb);
3. softer requirement hints (Requirement unless the fragment opens with an
   action verb; with a leading verb the fragment is ambiguous and is Noise);
4. leading action verbs / duty phrases / CJK duty context (Responsibility).

Requirement rules run before responsibility rules.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Pattern, Sequence

from .models import Verdict


MIN_LEN = 8
MAX_LEN = 500

# Leading action verbs (English). Matched at the start of the fragment after
# bullets are stripped; simple inflections (s/es/d/ed/ing) are accepted.
LATIN_ACTION_VERBS = [
    "analyze", "analyse", "assess", "assist", "build", "collaborate",
    "communicate", "conduct", "contribute", "coordinate", "create", "define",
    "deliver", "design", "develop", "document", "drive", "enhance", "ensure",
    "establish", "evaluate", "execute", "facilitate", "handle", "help",
    "identify", "implement", "improve", "investigate", "lead", "maintain",
    "manage", "mentor", "monitor", "optimize", "optimise", "organize",
    "oversee", "own", "participate", "perform", "plan", "prepare", "process",
    "provide", "report", "research", "review", "streamline", "supervise",
    "support", "test", "troubleshoot", "understand", "write",
]

# Leading action verbs (Traditional Chinese).
CJK_ACTION_VERBS = [
    "負責", "管理", "開發", "維護", "設計", "創建", "實施", "執行", "協調",
    "領導", "支援", "協助", "處理", "進行", "完成", "制定", "規劃", "監督",
    "評估", "分析", "審查", "改善", "優化", "建立", "確保", "提供", "參與",
    "配合", "溝通", "撰寫", "報告", "研究", "測試", "組織", "準備", "培訓",
    "指導", "推動", "落實",
]

# Duty phrases that open a fragment without being a bare verb.
LATIN_DUTY_LEADS = [
    r"(?:be\s+)?(?:responsible|accountable)\s+for\b",
    r"(?:you\s+will|you'll)\s+\w",
    r"in\s+charge\s+of\b",
    r"work\s+(?:closely\s+)?with\b",
]

# CJK phrases that mark duty context anywhere in the fragment.
CJK_DUTY_CONTEXT = [
    "工作內容", "職責範圍", "主要職責", "工作職責", "負責事項", "工作任務",
    "具體職責", "崗位職責", "主要工作", "日常工作", "核心職責",
]

# Qualification patterns: any hit makes the fragment a requirement.
QUALIFICATION_PATTERNS = [
    r"\bbachelor",
    r"\bmaster'?s\b",
    r"\bmaster\s+degree\b",
    r"\bdegree\b",
    r"\bdiploma\b",
    r"\bph\.?\s?d\b",
    r"\d+\s*\+?\s*(?:years?|yrs?)\b",
    r"\byears?\s+of\s+(?:\w+\s+){0,2}experience\b",
    r"\bcertif(?:ied|icate|ication)",
    r"\brequired\b",
    r"\bmust\s+(?:have|be|possess)\b",
    r"\bat\s+least\b",
    r"\bminimum\b",
    r"學位", r"學士", r"碩士", r"博士", r"學歷", r"年經驗", r"年以上",
    r"年或以上", r"至少", r"最少", r"必須", r"具備", r"擁有", r"認證",
]

# Softer requirement hints: count only when no action verb opens the fragment.
REQUIREMENT_HINTS = [
    r"\bproficien(?:t|cy)\b",
    r"\bfamiliar(?:ity)?\s+with\b",
    r"\bknowledge\s+(?:of|in)\b",
    r"\bunderstanding\s+of\b",
    r"\bexperience\s+(?:in|with)\b",
    r"\bhands-on\b",
    r"\bproven\b",
    r"\bfluen(?:t|cy)\b",
    r"\bpreferred\b",
    r"\ba\s+plus\b",
    r"\badvantage(?:ous)?\b",
    r"\bability\s+to\b",
    r"\bexcellent\b.*\bskills?\b",
    r"熟練", r"熟悉", r"了解", r"精通", r"知識", r"技能", r"經驗", r"優先", r"流利",
]

# UI / navigation noise, searched anywhere in the fragment.
NOISE_PATTERNS = [
    r"quick apply",
    r"apply now",
    r"save job",
    r"how you match",
    r"skills and credentials",
    r"show all",
    r"show more",
    r"view all",
    r"see more",
    r"report this job",
    r"be careful",
    r"don't provide",
    r"sign (?:in|out|up)",
    r"share (?:this|job)",
    r"google play",
    r"app store",
    r"cookie",
    r"申請", r"分享", r"打印", r"收藏", r"登錄", r"註冊", r"搜索", r"查看", r"關於我們",
]

# Fragments that are noise only when they make up the whole text.
NOISE_WHOLE_PATTERNS = [
    r"(?:menu|profile|career advice|explore companies|employer site)",
    r"(?:cancel|select|please|save|download)",
    r"(?:terms|conditions|privacy|copyright)",
    r"\d+\s*[dhm] ago",
    r"(?:page\s+)?\d+\s*(?:of|/)\s*\d+",
    r"(?:next|previous|prev)(?:\s+page)?",
]

# Whole-text noise that depends on letter case (all-caps labels, close glyphs).
NOISE_WHOLE_CASED = [
    r"[A-Z0-9]{2,}",
    r"[×✕]",
]

_LEADING_BULLET_RE = re.compile(r"^[\s•·\*\-–—>]+|^\(?\d{1,2}[\.\)]\s+")


def _compile_any(patterns: Iterable[str], flags: int = re.IGNORECASE) -> Pattern[str]:
    return re.compile("|".join(f"(?:{p})" for p in patterns), flags)


class TextClassifier:
    """Decide whether a fragment is a responsibility, a requirement, or noise.

    Instances hold only compiled rule tables and are safe to share.
    """

    def __init__(
        self,
        min_len: int = MIN_LEN,
        max_len: int = MAX_LEN,
        extra_noise_patterns: Sequence[str] = (),
    ) -> None:
        self.min_len = min_len
        self.max_len = max_len

        verbs = "|".join(LATIN_ACTION_VERBS)
        self._latin_lead = re.compile(rf"^(?:to\s+)?(?:{verbs})(?:e?s|e?d|ing)?\b", re.IGNORECASE)
        self._cjk_lead = re.compile("^(?:" + "|".join(CJK_ACTION_VERBS) + ")")
        self._duty_lead = re.compile("^(?:" + "|".join(LATIN_DUTY_LEADS) + ")", re.IGNORECASE)
        self._duty_context = _compile_any(CJK_DUTY_CONTEXT, 0)
        self._qualification = _compile_any(QUALIFICATION_PATTERNS)
        self._hints = _compile_any(REQUIREMENT_HINTS)
        self._noise = _compile_any(list(NOISE_PATTERNS) + list(extra_noise_patterns))
        self._noise_whole = re.compile(
            "^(?:" + "|".join(NOISE_WHOLE_PATTERNS) + r")[\s.!:]*$", re.IGNORECASE
        )
        self._noise_whole_cased = re.compile("^(?:" + "|".join(NOISE_WHOLE_CASED) + r")[\s.!:]*$")

    def classify(self, fragment: str) -> Verdict:
        """Return the verdict for a single fragment."""
        if not fragment or not (self.min_len <= len(fragment) <= self.max_len):
            return Verdict.NOISE
        text = fragment.strip()
        if not (self.min_len <= len(text) <= self.max_len):
            return Verdict.NOISE
        if self.is_noise(text):
            return Verdict.NOISE

        leading = self.starts_with_action(text)
        if self._qualification.search(text):
            return Verdict.REQUIREMENT
        if self._hints.search(text):
            return Verdict.NOISE if leading else Verdict.REQUIREMENT
        if leading or self._duty_context.search(text):
            return Verdict.RESPONSIBILITY
        return Verdict.NOISE

    def is_noise(self, text: str) -> bool:
        """True for navigation / button / boilerplate text."""
        text = text.strip()
        if self._noise.search(text):
            return True
        return bool(self._noise_whole.match(text) or self._noise_whole_cased.match(text))

    def starts_with_action(self, text: str) -> bool:
        """True when the fragment opens with an action verb or duty phrase."""
        body = _LEADING_BULLET_RE.sub("", text.strip(), count=1)
        return bool(
            self._latin_lead.match(body)
            or self._cjk_lead.match(body)
            or self._duty_lead.match(body)
        )

    def is_responsibility(self, fragment: str) -> bool:
        return self.classify(fragment) is Verdict.RESPONSIBILITY

    def is_requirement(self, fragment: str) -> bool:
        return self.classify(fragment) is Verdict.REQUIREMENT

    def select(self, fragments: Iterable[str], verdict: Verdict) -> List[str]:
        """Keep the fragments (stripped) that classify as `verdict`, in order."""
        return [f.strip() for f in fragments if self.classify(f) is verdict]


def classify(fragment: str) -> Verdict:
    """Classify with the default rule tables."""
    return TextClassifier().classify(fragment)
