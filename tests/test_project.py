import pytest

from visualsync.project import EventModel, ProjectModel


def _project():
    return ProjectModel(
        name="show",
        bpm=120,
        events=[
            EventModel(start=1.5, duration=2.0, lane=1, text="HELLO"),
            EventModel(start=4.0, duration=0.5, lane=3, text="WORLD"),
        ],
    )


def test_event_str():
    assert str(EventModel(start=1.5, duration=2.0)) == "1.5 - 2"


def test_event_dict_round_trip():
    event = EventModel(start=0.25, duration=3.0, lane=2, text="A")
    assert EventModel.from_dict(event.to_dict()) == event


def test_event_dict_missing_field():
    with pytest.raises(ValueError):
        EventModel.from_dict({"start": 1.0, "duration": 1.0, "lane": 0})


def test_project_dict_round_trip():
    project = _project()
    assert ProjectModel.from_dict(project.to_dict()) == project


def test_project_save_load(tmp_path):
    project = _project()
    path = tmp_path / "project.json"
    project.save(path)
    assert ProjectModel.load(path) == project


def test_project_events_must_be_list():
    with pytest.raises(ValueError):
        ProjectModel.from_dict({"name": "x", "bpm": 1, "events": 5})


def test_project_str_lists_each_event():
    project = _project()
    text = str(project)
    assert text.startswith("Project: \nshow:\n")
    assert text.splitlines()[2:] == [str(event) for event in project.events]