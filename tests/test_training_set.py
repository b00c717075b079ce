from __future__ import annotations

import logging

from conftest import make_place
from travel_ml import config
from travel_ml.features.schema import FEATURE_NAMES
from travel_ml.training.training_set import (
    prepare_training_data,
    samples_to_arrays,
    samples_to_frame,
)


def test_rejected_places_are_skipped() -> None:
    samples = prepare_training_data([
        make_place(name="Rejected", verified=False),
        make_place(name="Unawatuna", verified=True, type="beach"),
    ])

    assert len(samples) == 1
    assert samples[0].label == 6
    assert samples[0].place_name == "Unawatuna"
    assert len(samples[0].features) == 25


def test_unreviewed_places_are_eligible() -> None:
    place = make_place()
    del place["verified"]

    samples = prepare_training_data([place, make_place(verified=None)])

    assert len(samples) == 2


def test_bad_place_is_logged_and_skipped(caplog) -> None:
    places = [
        make_place(name="First", type="wildlife"),
        make_place(name="Broken", cost="expensive"),
        make_place(name="Last", type="mountain"),
    ]

    with caplog.at_level(logging.ERROR):
        samples = prepare_training_data(places)

    assert [s.place_name for s in samples] == ["First", "Last"]
    assert [s.label for s in samples] == [9, 7]
    assert "Broken" in caplog.text


def test_accepts_store_snapshots(store, add_place) -> None:
    add_place("a", type="urban")
    add_place("b", verified=False)

    samples = prepare_training_data(store.query(config.PENDING_COLLECTION))

    assert [s.label for s in samples] == [5]


def test_samples_to_frame_and_arrays() -> None:
    samples = prepare_training_data([
        make_place(name="Galle Fort", type="historical"),
        make_place(name="Yala", type="wildlife"),
    ])

    df = samples_to_frame(samples)
    assert list(df.columns) == FEATURE_NAMES + ["label", "place_name"]
    assert df["label"].tolist() == [8, 9]
    assert df["place_name"].tolist() == ["Galle Fort", "Yala"]

    X, y = samples_to_arrays(samples)
    assert X.shape == (2, 25)
    assert y.tolist() == [8, 9]


def test_empty_samples_give_empty_arrays() -> None:
    X, y = samples_to_arrays([])
    assert X.shape == (0, 25)
    assert y.shape == (0,)
    assert samples_to_frame([]).empty
