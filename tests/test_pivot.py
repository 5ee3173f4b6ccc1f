import dataclasses

import pytest

from lpsimplex.simplex import SlackForm, StandardForm


def clrs_slack():
    return StandardForm(
        c=[3, 1, 2],
        A=[[1, 1, 3], [2, 2, 5], [4, 1, 2]],
        b=[30, 24, 36],
    ).to_slack_form()


def test_pivot_rewrites_tableau():
    """x1 enters, x6 leaves.

        z  = 27 + x2/4 + x3/2 - 3x6/4
        x1 =  9 - x2/4 - x3/2 -  x6/4
        x4 = 21 - 3x2/4 - 5x3/2 + x6/4
        x5 =  6 - 3x2/2 - 4x3   + x6/2
    """
    slack = clrs_slack().pivot(5, 0)
    slack.check()

    assert slack.basic == (0, 3, 4)
    assert slack.nonbasic == (1, 2, 5)
    assert slack.v == pytest.approx(27)

    assert [slack.b[i] for i in slack.basic] == pytest.approx([9, 21, 6])
    assert [slack.c[j] for j in slack.nonbasic] == pytest.approx([0.25, 0.5, -0.75])
    expected = {
        0: [0.25, 0.5, 0.25],
        3: [0.75, 2.5, -0.25],
        4: [1.5, 4.0, -0.5],
    }
    for i, row in expected.items():
        assert [slack.a[i][j] for j in slack.nonbasic] == pytest.approx(row)

    # entries outside basic x nonbasic stay zero
    assert slack.c[0] == 0.0
    assert all(slack.a[i][0] == 0.0 for i in range(slack.num_variables))


def test_pivot_leaves_original_untouched():
    before = clrs_slack()
    slack = clrs_slack()
    after = slack.pivot(5, 0)
    assert slack == before
    assert after != before
    with pytest.raises(dataclasses.FrozenInstanceError):
        after.v = 0.0


def test_pivot_back_restores_tableau():
    original = clrs_slack()
    back = original.pivot(5, 0).pivot(0, 5)
    assert back.basic == original.basic
    assert back.nonbasic == original.nonbasic
    assert back.v == pytest.approx(0.0)
    for i in original.basic:
        assert back.b[i] == pytest.approx(original.b[i])
        for j in original.nonbasic:
            assert back.a[i][j] == pytest.approx(original.a[i][j])
    for j in original.nonbasic:
        assert back.c[j] == pytest.approx(original.c[j])


def test_pivot_rejects_invalid_pair():
    slack = clrs_slack()
    with pytest.raises(ValueError):
        slack.pivot(0, 1)  # 0 is nonbasic
    with pytest.raises(ValueError):
        slack.pivot(3, 4)  # 4 is basic


def test_zero_pivot_element():
    slack = StandardForm(c=[10, 1], A=[[1, 0], [20, 1]], b=[1, 100]).to_slack_form()
    with pytest.raises(RuntimeError):
        slack.pivot(2, 1)


def test_check_detects_broken_partition():
    slack = clrs_slack()
    broken = dataclasses.replace(slack, basic=(2, 3, 4))
    with pytest.raises(ValueError):
        broken.check()
    missing = dataclasses.replace(slack, basic=(3, 4))
    with pytest.raises(ValueError):
        missing.check()


def test_choose_entering_is_smallest_index():
    slack = clrs_slack()
    assert slack.choose_entering() == 0
    optimal = SlackForm((0,), (1,), [[0.0, 0.0], [1.0, 0.0]], [0.0, 1.0], [1e-9, 0.0])
    assert optimal.choose_entering() is None


def test_choose_leaving_minimum_ratio():
    slack = clrs_slack()
    # ratios 30/1, 24/2, 36/4
    assert slack.choose_leaving(0) == 5


def test_choose_leaving_tie_keeps_first_row():
    slack = StandardForm(c=[1], A=[[1], [2]], b=[2, 4]).to_slack_form()
    assert slack.choose_leaving(0) == 1


def test_choose_leaving_none_when_unbounded():
    slack = StandardForm(c=[1], A=[[-1], [1e-10]], b=[1, 1]).to_slack_form()
    assert slack.choose_leaving(0) is None


def test_basic_solution_and_objective():
    slack = clrs_slack().pivot(5, 0)
    solution = slack.basic_solution()
    assert solution == pytest.approx([9, 0, 0, 21, 6, 0])
    assert slack.objective(solution) == pytest.approx(27)
    with pytest.raises(ValueError):
        slack.objective([0.0])
