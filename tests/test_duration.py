import pytest

from passgate.core.duration import GrantDuration, SubstringDurationPolicy


@pytest.fixture()
def policy():
    return SubstringDurationPolicy()


@pytest.mark.parametrize("descriptor", ["7-day pass", "2027-promo", "$7.00 weekly", "Trial 7 DAYS"])
def test_anything_containing_seven_is_a_trial(policy, descriptor):
    assert policy.classify(descriptor) == GrantDuration(days=7, is_trial=True)


def test_empty_descriptor_defaults_to_thirty_days(policy):
    result = policy.classify("")
    assert result.days == 30
    assert result.is_trial is False


def test_none_descriptor_defaults_to_thirty_days(policy):
    assert policy.classify(None) == GrantDuration(days=30)


def test_thirty_days(policy):
    assert policy.classify("30 Day Access") == GrantDuration(days=30)


def test_year_is_case_insensitive(policy):
    assert policy.classify("Year Plan") == GrantDuration(days=365)
    assert policy.classify("YEARLY") == GrantDuration(days=365)


def test_first_match_wins(policy):
    # "7" is checked before "year" and "30"
    assert policy.classify("Yearly 2017").is_trial is True
    assert policy.classify("370 days").days == 7


def test_seconds():
    assert GrantDuration(days=365).seconds == 365 * 86400
