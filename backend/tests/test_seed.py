"""Tests for YAML seed loading."""
from __future__ import annotations

from datetime import date

import pytest

from acts.models.astronaut_detail import AstronautDetail
from acts.models.astronaut_duty import AstronautDuty
from acts.models.person import Person
from acts.seed import load_seed_file, resolve_seed_path, seed_people


class TestLoadSeedFile:

    def test_reads_people_list(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text("people:\n  - name: John Doe\n  - name: Jane Doe\n")
        assert [p["name"] for p in load_seed_file(path)] == ["John Doe", "Jane Doe"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text("")
        assert load_seed_file(path) == []

    def test_people_must_be_a_list(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text("people:\n  name: John Doe\n")
        with pytest.raises(ValueError):
            load_seed_file(path)

    def test_bundled_seed_file_resolves(self):
        path = resolve_seed_path("config/seed.yaml")
        assert path is not None
        names = [p["name"] for p in load_seed_file(path)]
        assert "John Doe" in names

    def test_missing_path_resolves_to_none(self):
        assert resolve_seed_path("config/does-not-exist.yaml") is None


class TestSeedPeople:

    def test_duties_follow_transition_rules(self, db):
        result = seed_people(db, [{
            "name": "Jane Doe",
            "duties": [
                {"rank": "MAJ", "duty_title": "MISSION_SPECIALIST", "duty_start_date": date(2015, 1, 10)},
                {"rank": "LTC", "duty_title": "RETIRED", "duty_start_date": "2023-09-01"},
            ],
        }])

        assert result == {"created": 1, "skipped": 0, "duties": 2, "errors": []}
        person = db.query(Person).one()
        detail = db.query(AstronautDetail).filter(AstronautDetail.person_id == person.id).one()
        assert detail.career_start_date == date(2015, 1, 10)
        assert detail.career_end_date == date(2023, 9, 1)
        first = (
            db.query(AstronautDuty)
            .filter(AstronautDuty.duty_title == "MISSION_SPECIALIST")
            .one()
        )
        assert first.duty_end_date == date(2023, 8, 31)

    def test_existing_person_is_skipped(self, db, add_person):
        add_person("John Doe")
        result = seed_people(db, [{
            "name": "John Doe",
            "duties": [{"rank": "CPT", "duty_title": "PILOT", "duty_start_date": date(2020, 1, 1)}],
        }])
        assert result["skipped"] == 1
        assert result["duties"] == 0
        assert db.query(AstronautDuty).count() == 0

    def test_invalid_start_date_is_collected_not_raised(self, db):
        result = seed_people(db, [
            {"name": "John Doe", "duties": [
                {"rank": "CPT", "duty_title": "PILOT", "duty_start_date": "01/02/2020"},
                {"rank": "CPT", "duty_title": "PILOT"},
                {"rank": "MAJ", "duty_title": "COMMANDER", "duty_start_date": date(2021, 1, 1)},
            ]},
            {"name": "Jane Doe"},
        ])
        assert result["created"] == 2
        assert result["duties"] == 1
        assert result["errors"] == [
            "John Doe: invalid duty_start_date '01/02/2020'",
            "John Doe: invalid duty_start_date None",
        ]

    def test_rejected_records_are_collected(self, db):
        result = seed_people(db, [
            {"name": ""},
            {"name": "John Doe", "duties": [
                {"rank": "CPT", "duty_title": "PILOT", "duty_start_date": date(2021, 1, 1)},
                {"rank": "MAJ", "duty_title": "COMMANDER", "duty_start_date": date(2020, 1, 1)},
            ]},
        ])
        assert result["created"] == 1
        assert result["duties"] == 1
        assert result["errors"] == [
            "<blank>: Name is required",
            "John Doe: Duty Start Date must be after the current duty start date",
        ]
