"""Unit tests for the filter pipeline."""

import pytest
from datetime import timedelta

from engine import apply_filters, matches_search, within_window
from models import Category, FilterState, RecencyWindow


class TestSearch:

    def test_case_insensitive_substring(self, make_post):
        post = make_post(title="NASA launches new Rover")
        assert matches_search(post, "rover")
        assert matches_search(post, "NASA LAUNCHES")
        assert not matches_search(post, "comet")

    def test_empty_term_matches(self, make_post):
        assert matches_search(make_post(title="anything"), "")


class TestRecency:

    @pytest.mark.parametrize("window,age,expected", [
        (RecencyWindow.ALL, timedelta(days=365), True),
        (RecencyWindow.HOUR, timedelta(minutes=59), True),
        (RecencyWindow.HOUR, timedelta(hours=1), False),
        (RecencyWindow.DAY, timedelta(hours=23), True),
        (RecencyWindow.DAY, timedelta(days=2), False),
        (RecencyWindow.WEEK, timedelta(days=6), True),
        (RecencyWindow.WEEK, timedelta(days=8), False),
    ])
    def test_window_bounds(self, make_post, fixed_time, window, age, expected):
        assert within_window(make_post(age=age), window, fixed_time) is expected


class TestApplyFilters:

    def test_all_pass_with_defaults(self, make_post, fixed_time):
        posts = [make_post("1"), make_post("2", category=Category.HEALTH)]
        assert apply_filters(posts, FilterState(), fixed_time) == posts

    def test_hidden_category_removed(self, make_post, fixed_time):
        posts = [make_post("1"), make_post("2", category=Category.HEALTH)]
        state = FilterState().with_category(Category.HEALTH, False)
        assert [p.id for p in apply_filters(posts, state, fixed_time)] == ["1"]

    def test_all_conditions_combined(self, make_post, fixed_time):
        posts = [
            make_post("1", title="Mars rover", age=timedelta(minutes=5)),
            make_post("2", title="Mars rover", age=timedelta(days=3)),
            make_post("3", title="Stock market", age=timedelta(minutes=5)),
            make_post("4", title="Mars base", category=Category.SCIENCE, age=timedelta(minutes=5)),
        ]
        state = FilterState(search_term="mars", recency_window=RecencyWindow.DAY).with_category(
            Category.SCIENCE, False)
        assert [p.id for p in apply_filters(posts, state, fixed_time)] == ["1"]

    def test_never_reorders(self, make_post, fixed_time):
        posts = [make_post(str(i), title=f"item {i}") for i in (5, 3, 9, 1, 7)]
        result = apply_filters(posts, FilterState(search_term="item"), fixed_time)
        assert [p.id for p in result] == ["5", "3", "9", "1", "7"]

    def test_idempotent(self, make_post, fixed_time):
        posts = [
            make_post("1", title="Alpha", age=timedelta(hours=2)),
            make_post("2", title="Beta", category=Category.BUSINESS),
            make_post("3", title="alphabet", age=timedelta(days=10)),
        ]
        state = FilterState(search_term="alpha", recency_window=RecencyWindow.WEEK)
        once = apply_filters(posts, state, fixed_time)
        assert apply_filters(once, state, fixed_time) == once

    def test_does_not_mutate_input(self, make_post, fixed_time):
        posts = [make_post("1"), make_post("2", category=Category.HEALTH)]
        snapshot = list(posts)
        apply_filters(posts, FilterState().with_category(Category.HEALTH, False), fixed_time)
        assert posts == snapshot

    def test_empty_collection(self, fixed_time):
        assert apply_filters([], FilterState(), fixed_time) == []

    def test_naive_now_accepted(self, make_post, fixed_time):
        post = make_post(age=timedelta(minutes=10))
        naive_now = fixed_time.replace(tzinfo=None)
        assert apply_filters([post], FilterState(recency_window=RecencyWindow.HOUR), naive_now) == [post]
