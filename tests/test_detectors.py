"""Tests for directory.detectors intent extraction."""

import dataclasses

import pytest

from directory.detectors import INTENT_PATTERNS, Intent, parse_intent, question_words


def test_office_hours_question():
    result = parse_intent("what are the office hours of Dr. Mohammad?")
    assert result.intent == Intent.OFFICE_HOURS
    assert result.entity == "dr mohammad"
    assert result.confidence == 0.8
    assert result.original_query == "what are the office hours of Dr. Mohammad?"


@pytest.mark.parametrize("query,intent,entity", [
    ("email of Lina Haddad", Intent.CONTACT_INFO, "lina haddad"),
    ("How can I contact Sara Nasser?", Intent.CONTACT_INFO, "sara nasser"),
    ("Where can I find Dr. Yousef?", Intent.OFFICE_LOCATION, "dr yousef"),
    ("Who is Mohammad Al Rashid?", Intent.WHO_IS, "mohammad al rashid"),
    ("tell me about the chess club", Intent.WHO_IS, "the chess club"),
    ("registration info", Intent.REGISTRAR, "info"),
    ("engineering dean", Intent.DEAN, "engineering"),
    ("Omar Khalil schedule", Intent.OFFICE_HOURS, "omar khalil"),
])
def test_intent_and_entity(query, intent, entity):
    result = parse_intent(query)
    assert result.intent == intent
    assert result.entity == entity


def test_department_question():
    result = parse_intent("Which department does Rania Saleh work in?")
    assert result.intent == Intent.DEPARTMENT
    assert "rania saleh" in result.entity


def test_admission_question():
    result = parse_intent("How do I apply for admission?")
    assert result.intent == Intent.ADMISSION


def test_first_matching_pattern_wins():
    # "who is ..." is declared before the dean patterns, so it shadows them
    result = parse_intent("who is the dean of engineering")
    assert result.intent == Intent.WHO_IS
    assert result.entity == "the dean of engineering"


def test_generic_question_strips_leading_phrase():
    result = parse_intent("How does grading work?")
    assert result.intent == Intent.QUESTION
    assert result.entity == "grading work?"
    assert result.confidence == 0.6


def test_generic_question_keeps_unmatched_lead():
    result = parse_intent("how many clubs exist")
    assert result.intent == Intent.QUESTION
    assert result.entity == "how many clubs exist"


def test_interrogative_must_be_a_whole_word():
    assert parse_intent("somewhat useful") is None


@pytest.mark.parametrize("query", [None, "", "   ", "computer science", "S-321"])
def test_no_intent(query):
    assert parse_intent(query) is None


def test_intent_result_is_immutable():
    result = parse_intent("who is omar")
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.entity = "someone else"


def test_pattern_table_order():
    order = list(dict.fromkeys(intent for intent, _ in INTENT_PATTERNS))
    assert order == [
        Intent.OFFICE_HOURS,
        Intent.CONTACT_INFO,
        Intent.OFFICE_LOCATION,
        Intent.DEPARTMENT,
        Intent.WHO_IS,
        Intent.ADMISSION,
        Intent.REGISTRAR,
        Intent.DEAN,
    ]


def test_question_words_flags():
    flags = question_words({"where", "is", "omar"})
    assert flags["is_where_query"] is True
    assert flags["is_who_query"] is False
