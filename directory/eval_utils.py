import json
from pathlib import Path

from .config import DATA_DIR
from .detectors import parse_intent

DEFAULT_EXAMPLES_PATH = DATA_DIR / "intent_examples.json"


def load_examples(path: Path = DEFAULT_EXAMPLES_PATH) -> dict:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        return {"examples": []}


def build_tests_from_examples(data):
    """Builds (query, expected intent) cases from labelled examples."""
    tests = []
    for example in data.get("examples", []):
        q = example.get("q")
        if isinstance(q, str) and q.strip():
            tests.append({"q": q.strip(), "intent": example.get("intent")})
    return tests


def run_offline_eval(tests):
    results = []
    correct = 0
    total = len(tests)

    for t in tests:
        parsed = parse_intent(t["q"])
        predicted = parsed.intent.value if parsed else None
        ok = predicted == t["intent"]
        correct += 1 if ok else 0
        results.append({
            "query": t["q"],
            "expected": t["intent"],
            "predicted": predicted,
            "ok": ok,
            "entity": parsed.entity if parsed else None,
        })

    accuracy = correct / total if total else 0.0
    return accuracy, results
