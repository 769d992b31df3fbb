"""Static keyword dictionary for sales listings.

Each entry maps a display label to a category and the patterns that detect it.
Patterns are compiled with re.ASCII so that ``\\b`` only treats ASCII
letters/digits as word characters; otherwise "IS" inside "ISとFS" would not be
found next to Japanese characters.
"""

import re
from dataclasses import dataclass
from typing import List, Tuple

SALES_FORMAT = "営業形態"
PRODUCT_INDUSTRY = "商材・業種"
TOOLING = "ツール"
SALES_STYLE = "営業スタイル"

# Categories in the order used when summarising a listing
CATEGORY_ORDER = (SALES_FORMAT, PRODUCT_INDUSTRY, TOOLING, SALES_STYLE)

_FLAGS = re.IGNORECASE | re.ASCII


@dataclass(frozen=True)
class KeywordEntry:
    label: str
    category: str
    patterns: Tuple[re.Pattern, ...]

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns)


@dataclass(frozen=True)
class DetectedKeyword:
    label: str
    category: str


def _entry(label: str, category: str, *patterns: str) -> KeywordEntry:
    return KeywordEntry(label, category, tuple(re.compile(p, _FLAGS) for p in patterns))


KEYWORD_DICTIONARY = (
    _entry("IS（インサイドセールス）", SALES_FORMAT, r"インサイドセールス|\bIS\b|Inside\s*Sales"),
    _entry("FS（フィールドセールス）", SALES_FORMAT, r"フィールドセールス|\bFS\b|Field\s*Sales"),
    _entry("BDR", SALES_FORMAT, r"\bBDR\b|アウトバウンド"),
    _entry("SDR", SALES_FORMAT, r"\bSDR\b|インバウンド"),
    _entry("CS（カスタマーサクセス）", SALES_FORMAT, r"カスタマーサクセス|\bCS\b|Customer\s*Success"),
    _entry("新規開拓", SALES_FORMAT, r"新規開拓|新規顧客|新規獲得"),
    _entry("テレアポ", SALES_FORMAT, r"テレアポ|電話営業|コールセンター"),
    _entry("反響営業", SALES_FORMAT, r"反響営業"),
    _entry("アップセル・クロスセル", SALES_FORMAT, r"アップセル|クロスセル"),
    _entry("SaaS", PRODUCT_INDUSTRY, r"\bSaaS\b"),
    _entry("無形商材", PRODUCT_INDUSTRY, r"無形商材"),
    _entry("HR・人材サービス", PRODUCT_INDUSTRY, r"\bHR\b|人材サービス|人材紹介|求人"),
    _entry("不動産・不動産DX", PRODUCT_INDUSTRY, r"不動産"),
    _entry("保険・金融", PRODUCT_INDUSTRY, r"保険|金融|フィンテック"),
    _entry("AI・機械学習", PRODUCT_INDUSTRY, r"\bAI\b|人工知能|機械学習"),
    _entry("法務・LegalTech", PRODUCT_INDUSTRY, r"法務|\bLegalTech\b|弁護士"),
    _entry("車両・自動車", PRODUCT_INDUSTRY, r"車両|自動車|車販|車買取"),
    _entry("DX・デジタル化", PRODUCT_INDUSTRY, r"\bDX\b|デジタル化"),
    _entry("医療・ヘルスケア", PRODUCT_INDUSTRY, r"医療|ヘルスケア"),
    _entry("光回線・通信", PRODUCT_INDUSTRY, r"光回線|通信|テレコム"),
    _entry("クラウド・インフラ", PRODUCT_INDUSTRY, r"クラウド|\bAWS\b|\bGCP\b|\bAzure\b"),
    _entry("Salesforce", TOOLING, r"Salesforce|\bSFA\b|\bCRM\b"),
    _entry("HubSpot", TOOLING, r"HubSpot"),
    _entry("Slack・Teams", TOOLING, r"\bSlack\b|\bTeams\b"),
    _entry("エンタープライズ営業", SALES_STYLE, r"エンタープライズ|大手企業|中堅大手"),
    _entry("ABM", SALES_STYLE, r"\bABM\b|アカウントベースド"),
    _entry("マネジメント・リーダー", SALES_STYLE, r"マネジメント|リーダー|チームリード"),
)


def detect_keywords(text: str) -> List[DetectedKeyword]:
    """Return every dictionary entry found in ``text``, in dictionary order."""
    if not text:
        return []
    return [
        DetectedKeyword(entry.label, entry.category)
        for entry in KEYWORD_DICTIONARY
        if entry.matches(text)
    ]


def group_by_category(keywords: List[DetectedKeyword]) -> dict:
    """Group detected labels by category, keeping first-seen category order."""
    grouped: dict = {}
    for keyword in keywords:
        grouped.setdefault(keyword.category, []).append(keyword.label)
    return grouped
