from directory.eval_utils import build_tests_from_examples, load_examples, run_offline_eval


def test_bundled_examples_all_pass():
    tests = build_tests_from_examples(load_examples())
    accuracy, results = run_offline_eval(tests)
    assert len(tests) == 10
    assert accuracy == 1.0
    assert all(r["ok"] for r in results)


def test_build_tests_skips_blank_queries():
    data = {"examples": [
        {"q": "  who is omar ", "intent": "who_is"},
        {"q": "   ", "intent": "who_is"},
        {"intent": "dean"},
    ]}
    assert build_tests_from_examples(data) == [{"q": "who is omar", "intent": "who_is"}]


def test_run_offline_eval_reports_misses():
    accuracy, results = run_offline_eval([
        {"q": "who is omar", "intent": "who_is"},
        {"q": "computer science", "intent": "department"},
    ])
    assert accuracy == 0.5
    assert results[1]["predicted"] is None
    assert results[1]["entity"] is None
    assert results[0]["entity"] == "omar"


def test_run_offline_eval_empty():
    assert run_offline_eval([]) == (0.0, [])


def test_load_examples_missing_file(tmp_path):
    assert load_examples(tmp_path / "nope.json") == {"examples": []}
