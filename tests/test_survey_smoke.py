import csv
import json

import pytest
from packages.engine import DIFFICULTIES, RoundConfig
from packages.survey import BotPlayer, run_batch, run_playout, survey_difficulties, write_csv, write_manifest


def test_survey_rows(cat_index, three_of_a_kind):
    rows = survey_difficulties(cat_index, [three_of_a_kind, DIFFICULTIES["easy"], DIFFICULTIES["expert"]])
    trio, easy, expert = rows

    assert trio["eligible"] == 3
    assert trio["size_min"] == trio["size_max"] == 3.0
    assert easy["eligible"] == 0 and easy["size_p50"] == 0.0
    assert expert["eligible"] == len(cat_index)
    assert expert["share"] == 1.0


def test_bot_with_no_recall_times_out(cat_index, three_of_a_kind):
    r = run_playout(cat_index, three_of_a_kind, bot=BotPlayer(0.0, seed=1), seed=1)
    assert r["finished"] is True
    assert r["words"] == 0
    assert r["lives_lost"] == 3


def test_bot_with_full_recall_exhausts_words(cat_index, three_of_a_kind):
    r = run_playout(cat_index, three_of_a_kind, bot=BotPlayer(1.0, seed=1), seed=1)
    # Only three distinct words exist, then every turn times out
    assert r["words"] == 3
    assert r["lives_lost"] == 3
    assert r["turns"] == 6
    assert r["finished"]


def test_playout_counts_bonus(cat_index, three_of_a_kind):
    cfg = RoundConfig(tracked_letters="CAT")
    r = run_playout(cat_index, three_of_a_kind, bot=BotPlayer(1.0, seed=2), config=cfg, seed=2)
    assert r["bonuses"] == 3
    # 3 starting + 2 bonus lives (capped at 5) must be lost
    assert r["lives_lost"] == 5


def test_max_turns_cap(cat_index, three_of_a_kind):
    r = run_playout(cat_index, three_of_a_kind, bot=BotPlayer(1.0, seed=1), seed=1, max_turns=2)
    assert r["finished"] is False
    assert r["turns"] == 3


def test_bot_rejects_bad_recall():
    with pytest.raises(ValueError):
        BotPlayer(1.5)


def test_batch_is_reproducible(cat_index):
    expert = DIFFICULTIES["expert"]
    a = run_batch(cat_index, expert, 3, recall=0.5, seed=123)
    b = run_batch(cat_index, expert, 3, recall=0.5, seed=123)
    assert a == b
    assert [r["seed"] for r in a] == [124, 125, 126]


def test_write_outputs(tmp_path, cat_index, three_of_a_kind):
    rows = [run_playout(cat_index, three_of_a_kind, bot=BotPlayer(0.5, seed=s), seed=s) for s in (1, 2)]
    csv_path = write_csv(rows, str(tmp_path / "out" / "survey.csv"))
    with open(csv_path, newline="", encoding="utf-8") as f:
        read = list(csv.DictReader(f))
    assert len(read) == 2
    assert read[0]["difficulty"] == "trio"

    m_path = write_manifest({"run_id": "x", "tiers": survey_difficulties(cat_index, [three_of_a_kind])},
                            str(tmp_path / "out" / "m.json"))
    with open(m_path, encoding="utf-8") as f:
        assert json.load(f)["tiers"][0]["eligible"] == 3
