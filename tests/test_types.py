"""Tests for roster.types record resolution."""

from roster.types import Contract, Person, Profession, WhiteTag


def test_profession_resolved_to_single_entry(make_raw):
    person = Person.from_dict(make_raw(professions={"Actor": "0.45"}))
    assert person.profession == Profession(kind="Actor", level="0.45")
    assert person.profession.value == 0.45


def test_first_profession_wins_when_several(make_raw):
    person = Person.from_dict(make_raw(professions={"Actor": "0.4", "Director": "0.9"}))
    assert person.profession.kind == "Actor"


def test_missing_or_empty_profession_is_none(make_raw):
    assert Person.from_dict(make_raw(professions={})).profession is None
    raw = make_raw()
    del raw["professions"]
    assert Person.from_dict(raw).profession is None


def test_numeric_profession_level_becomes_text(make_raw):
    person = Person.from_dict(make_raw(professions={"Actor": 1.0}))
    assert person.profession.level == "1"


def test_limit_falls_back_to_capitalized_key(make_raw):
    raw = make_raw()
    del raw["limit"]
    raw["Limit"] = 0.6
    assert Person.from_dict(raw).limit == 0.6


def test_legacy_list_tag_store_is_none(make_raw):
    assert Person.from_dict(make_raw(whiteTagsNEW=[])).white_tags is None
    assert Person.from_dict(make_raw(whiteTagsNEW={})).white_tags is None


def test_tag_store_parsed(make_raw):
    raw = make_raw(
        whiteTagsNEW={
            "ART": {
                "id": "ART",
                "value": "0.300",
                "dateAdded": "1930-02-01T00:00:00",
                "movieId": 7,
                "IsOverall": False,
                "overallValues": [
                    {"movieId": 7, "sourceType": 2, "value": "0.300", "dateAdded": "x"}
                ],
            }
        }
    )
    tag = Person.from_dict(raw).white_tags["ART"]
    assert isinstance(tag, WhiteTag)
    assert tag.movie_id == 7
    assert tag.overall_values[0].source_type == 2


def test_unknown_keys_kept_in_extra_and_reemitted(make_raw):
    raw = make_raw(bonusCards=[1, 2], someFlag=True)
    person = Person.from_dict(raw)
    assert person.extra == {"bonusCards": [1, 2], "someFlag": True}
    data = person.to_dict()
    assert data["bonusCards"] == [1, 2]
    assert data["someFlag"] is True


def test_to_dict_emits_wire_keys(make_raw):
    data = Person.from_dict(make_raw(limit=0.7)).to_dict()
    assert data["professions"] == {"Actor": "0.5"}
    assert data["limit"] == data["Limit"] == 0.7
    assert data["selfEsteem"] == "0.25"
    assert "whiteTagsNEW" not in data


def test_contract_unlimited():
    contract = Contract.from_dict({"contractType": 2, "amount": 3})
    assert contract.is_unlimited
    assert not Contract.from_dict({"contractType": 0, "amount": 3}).is_unlimited


def test_malformed_numbers_degrade_to_zero(make_raw):
    person = Person.from_dict(make_raw(mood="abc", state=None, gender="x"))
    assert person.mood == 0.0
    assert person.state == 0
    assert person.gender == 0


def test_bonus_cards_round_trip(make_raw):
    person = Person.from_dict(make_raw(bonusCards=[2, 1]))
    assert person.bonus_cards == [2, 1]
    assert "bonusCards" not in person.extra
    assert person.to_dict()["bonusCards"] == [2, 1]
    assert Person.from_dict(make_raw()).bonus_cards is None
