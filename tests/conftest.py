import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from hair_advisor.core import config as config_module  # noqa: E402
from hair_advisor.core import container as container_module  # noqa: E402
from hair_advisor.core.config import (  # noqa: E402
    ApplicationConfig,
    Config,
    DatabaseConfig,
    IntegrationConfig,
    ParserConfig,
)
from hair_advisor.core.container import Container  # noqa: E402
from hair_advisor.core.parsing.report_parser import ReportParser  # noqa: E402
from hair_advisor.integrations.advice_client import AdviceResult  # noqa: E402


ENGLISH_REPORT = """**Comprehensive Hair Analysis Report**

**Global Hair State Score:**
82%

**Detailed Scalp Analysis:**
The scalp appears healthy with minimal flaking. Mild dryness near the crown.

**Detailed Color Analysis:**
- Detected Color: Dark Brown
- Color Reference: Level 3
- Hex Code: #5D4037
- Summary: Rich dark brown with warm undertones.

**Key Observations and Potential Issues:**
- Slight frizz at the ends.

**Recommendations:**
- Recommendation: Drink more water daily. IconHint: 💧
- Recommendation: Use a sulfate-free shampoo. IconHint: shampoo
- Recommendation: Trim split ends every 8 weeks.
- Recommendation: Protect hair from UV exposure. IconHint: sun
- Recommendation: Try a weekly herbal mask. IconHint: leaf
"""

FRENCH_REPORT = """**Rapport d’analyse complète des cheveux**

**Score global de l’état des cheveux :**
74 %

**Analyse détaillée du cuir chevelu :**
Le cuir chevelu présente une légère sécheresse sans rougeurs.

**Analyse détaillée de la couleur :**
- Couleur détectée : Châtain clair
- Code hexadécimal : #8B5A2B
- Résumé : Un châtain clair lumineux.

**Recommandations :**
- Recommandation : Utilisez un après-shampooing hydratant. IconHint : water
- Recommandation : Massez le cuir chevelu chaque soir.
"""

ARABIC_REPORT = """**تقرير تحليل الشعر الشامل**

**الدرجة العالمية لحالة الشعر:**
68%

**تحليل مفصل لفروة الرأس:**
فروة الرأس جافة قليلاً مع وجود قشرة خفيفة في المنطقة الأمامية.

**تحليل مفصل للون:**
- اللون المكتشف: بني داكن
- رمز اللون السداسي: #4A3728
- الملخص: لون بني داكن طبيعي.

**التوصيات:**
- توصية: استخدمي شامبو لطيف. IconHint: شامبو
- توصية: اشربي الكثير من الماء. IconHint: 💧
"""


class FakeAdviceClient:
    def __init__(self, responses: Optional[List[AdviceResult]] = None) -> None:
        self.responses = list(responses or [AdviceResult.ok(ENGLISH_REPORT)])
        self.prompts: List[str] = []

    def get_advice(self, prompt: str) -> AdviceResult:
        self.prompts.append(prompt)
        return self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]


class FakeAnalysisService:
    def __init__(self, records: Optional[Dict[int, Any]] = None) -> None:
        self.records: Dict[int, Any] = dict(records or {})
        self.saved: List[Dict[str, Any]] = []

    def save_analysis(self, user_id: str, raw_text: str, image_references=None) -> int:
        self.saved.append({"user_id": user_id, "raw_text": raw_text, "image_references": dict(image_references or {})})
        return 100 + len(self.saved)

    def get_user_analyses(self, user_id: str, days: int = 30, limit: int = 50):
        return [record for record in self.records.values() if record.user_id == user_id][:limit]

    def get_analysis(self, analysis_id: int):
        return self.records.get(analysis_id)

    def delete_analysis(self, analysis_id: int) -> bool:
        return self.records.pop(analysis_id, None) is not None


class FakeCursor:
    def __init__(self, fetchone_result=None, fetchall_result=None, rowcount: int = 0, error: Optional[Exception] = None) -> None:
        self.fetchone_result = fetchone_result
        self.fetchall_result = fetchall_result or []
        self.rowcount = rowcount
        self.error = error
        self.executed: List[Any] = []

    def execute(self, query: str, params=None) -> None:
        self.executed.append((query, params))
        if self.error is not None:
            raise self.error

    def fetchone(self):
        return self.fetchone_result

    def fetchall(self):
        return self.fetchall_result


class FakeConnectionManager:
    def __init__(self, cursor: FakeCursor) -> None:
        self.cursor = cursor

    @contextmanager
    def get_cursor(self):
        yield self.cursor


def make_config(**app_overrides) -> Config:
    return Config(
        database=DatabaseConfig(),
        integrations=IntegrationConfig(),
        parser=ParserConfig(),
        app=ApplicationConfig(**app_overrides),
    )


@pytest.fixture(autouse=True)
def reset_globals():
    config_module.reset_config()
    container_module.reset_container()
    yield
    config_module.reset_config()
    container_module.reset_container()


@pytest.fixture
def parser() -> ReportParser:
    return ReportParser()


@pytest.fixture
def fake_advice_client() -> FakeAdviceClient:
    return FakeAdviceClient()


@pytest.fixture
def fake_analysis_service() -> FakeAnalysisService:
    return FakeAnalysisService()


@pytest.fixture
def container_factory():
    def _factory(advice_client=None, analysis_service=None, **app_overrides) -> Container:
        container = Container()
        container.register_instance('config', make_config(**app_overrides))
        container.register_instance('report_parser', ReportParser())
        container.register_instance('advice_client', advice_client or FakeAdviceClient())
        container.register_instance('analysis_service', analysis_service or FakeAnalysisService())
        return container

    return _factory


@pytest.fixture
def english_report() -> str:
    return ENGLISH_REPORT


@pytest.fixture
def french_report() -> str:
    return FRENCH_REPORT


@pytest.fixture
def arabic_report() -> str:
    return ARABIC_REPORT


@pytest.fixture
def fake_db_factory():
    def _factory(**cursor_kwargs):
        cursor = FakeCursor(**cursor_kwargs)
        return cursor, FakeConnectionManager(cursor)

    return _factory
