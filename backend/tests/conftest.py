from datetime import date

import pytest

from policytracker.schemas import CriterionScore, Party, Policy, PolicySource
from policytracker.services import policy_store


def make_policy(day: date, text: str, **scores: tuple[int, int]) -> Policy:
    return Policy(
        date_announced=day,
        policy_text=text,
        scores={k: CriterionScore(score=s, weight=w, reasoning="") for k, (s, w) in scores.items()},
    )


@pytest.fixture
def sample_parties() -> list[Party]:
    return [
        Party(
            party_name="Labour",
            color="#E4003B",
            policies=[
                make_policy(date(2024, 7, 6), "Scrap the Rwanda scheme", human_rights=(9, 3), economic_impact=(6, 1)),
                make_policy(date(2024, 9, 16), "Counter-terror powers for smuggling", human_rights=(4, 2)),
                make_policy(date(2025, 5, 12), "Raise salary threshold"),
            ],
        ),
        Party(
            party_name="Conservative",
            color="#0087DC",
            policies=[
                make_policy(date(2023, 12, 4), "Family visa income rule", human_rights=(3, 2), economic_impact=(4, 2)),
                Policy(
                    date_announced=date(2023, 3, 7),
                    policy_text="Illegal Migration Bill",
                    scores={"human_rights": CriterionScore(score=1, weight=3)},
                    source=PolicySource(notes="Second reading"),
                ),
            ],
        ),
    ]


@pytest.fixture
def migration_dir(tmp_path, sample_parties):
    policy_store.save_parties("migration", sample_parties, tmp_path)
    return tmp_path
