"""Tests for progress snapshots and attempt submission."""

from datetime import datetime, timedelta, timezone

import pytest

from tests.conftest import make_question, make_quiz


def options_by_text(question):
    return {option["text"]: option["id"] for option in question["options"]}


@pytest.mark.asyncio
async def test_no_progress_is_null(client, quiz):
    r = await client.get(f"/api/progress/{quiz['id']}")
    assert r.status_code == 200
    assert r.json() is None


@pytest.mark.asyncio
async def test_progress_is_one_record_per_quiz(client, quiz):
    q1, q2 = quiz["questions"]
    first = await client.post(
        f"/api/progress/{quiz['id']}",
        json={"mode": "immediate", "answers": {q1["id"]: [q1["options"][0]["id"]]}},
    )
    second = await client.post(
        f"/api/progress/{quiz['id']}",
        json={
            "mode": "immediate",
            "current_question_index": 1,
            "answers": {q2["id"]: [o["id"] for o in q2["options"][:2]]},
            "skipped_questions": [q1["id"]],
            "hints_used": [q2["id"]],
        },
    )
    assert first.status_code == 200 and second.status_code == 200
    assert first.json()["id"] == second.json()["id"]

    stored = (await client.get(f"/api/progress/{quiz['id']}")).json()
    assert stored["current_question_index"] == 1
    assert stored["answers"] == {q2["id"]: [o["id"] for o in q2["options"][:2]]}
    assert stored["skipped_questions"] == [q1["id"]]
    assert stored["hints_used"] == [q2["id"]]


@pytest.mark.asyncio
async def test_mode_is_fixed_for_a_session(client, quiz):
    await client.post(f"/api/progress/{quiz['id']}", json={"mode": "immediate"})
    r = await client.post(f"/api/progress/{quiz['id']}", json={"mode": "end", "current_question_index": 1})
    assert r.json()["mode"] == "immediate"
    assert r.json()["current_question_index"] == 1


@pytest.mark.asyncio
async def test_new_session_replaces_previous(client, quiz):
    await client.post(f"/api/progress/{quiz['id']}", json={"mode": "immediate"})
    restarted = datetime.now(timezone.utc) + timedelta(minutes=5)
    r = await client.post(
        f"/api/progress/{quiz['id']}", json={"mode": "end", "started_at": restarted.isoformat()}
    )
    assert r.json()["mode"] == "end"


@pytest.mark.asyncio
async def test_invalid_mode_is_rejected(client, quiz):
    r = await client.post(f"/api/progress/{quiz['id']}", json={"mode": "later"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_clear_progress_is_idempotent(client, quiz):
    await client.post(f"/api/progress/{quiz['id']}", json={"mode": "end"})
    assert (await client.delete(f"/api/progress/{quiz['id']}")).status_code == 200
    assert (await client.delete(f"/api/progress/{quiz['id']}")).status_code == 200
    assert (await client.get(f"/api/progress/{quiz['id']}")).json() is None
    assert (await client.get(f"/api/attempts/quiz/{quiz['id']}")).json() == []


@pytest.mark.asyncio
async def test_submit_scores_and_clears_progress(client, quiz):
    q1, q2 = quiz["questions"]
    france, baltic = options_by_text(q1), options_by_text(q2)
    await client.post(f"/api/progress/{quiz['id']}", json={"mode": "end", "hints_used": [q1["id"]]})
    started_at = datetime.now(timezone.utc) - timedelta(seconds=90)

    r = await client.post(
        "/api/attempts",
        json={
            "quiz_id": quiz["id"],
            "mode": "end",
            "started_at": started_at.isoformat(),
            "answers": [
                {"question_id": q1["id"], "selected_option_ids": [france["Paris"]]},
                {"question_id": q2["id"], "selected_option_ids": [baltic["Riga"]]},
            ],
        },
    )

    assert r.status_code == 201, r.text
    attempt = r.json()
    assert attempt["score"] == pytest.approx(1.5)
    assert attempt["total_points"] == 2
    assert attempt["percentage"] == 75.0
    assert attempt["questions_skipped"] == 0
    assert 89 <= attempt["duration"] <= 120
    assert attempt["hints_used"] == [q1["id"]]
    assert attempt["answers"][1]["correct_option_ids"] == [baltic["Riga"], baltic["Tallinn"]]
    assert attempt["answers"][1]["is_correct"] is False
    assert (await client.get(f"/api/progress/{quiz['id']}")).json() is None


@pytest.mark.asyncio
async def test_four_question_attempt_with_one_skip(client):
    questions = [make_question(f"Question number {i}", [("right", True), ("wrong", False)]) for i in range(4)]
    quiz = (await client.post("/api/quizzes", json=make_quiz(questions=questions))).json()
    answers = [
        {"question_id": q["id"], "selected_option_ids": [options_by_text(q)["right"]]}
        for q in quiz["questions"][:3]
    ]

    r = await client.post("/api/attempts", json={"quiz_id": quiz["id"], "mode": "immediate", "answers": answers})

    attempt = r.json()
    assert attempt["score"] == pytest.approx(3.0)
    assert attempt["total_points"] == 4
    assert attempt["percentage"] == 75.0
    assert attempt["questions_skipped"] == 1
    assert attempt["duration"] == 0


@pytest.mark.asyncio
async def test_submit_against_missing_quiz(client):
    r = await client.post("/api/attempts", json={"quiz_id": "gone", "mode": "end", "answers": []})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_attempt_history_and_delete(client, quiz):
    payload = {"quiz_id": quiz["id"], "mode": "end", "answers": []}
    first = (await client.post("/api/attempts", json=payload)).json()
    await client.post("/api/attempts", json=payload)

    history = (await client.get("/api/attempts")).json()
    assert len(history) == 2
    assert {a["quiz_title"] for a in history} == {"Capitals of Europe"}
    assert (await client.get(f"/api/attempts/{first['id']}")).json()["questions_skipped"] == 2

    assert (await client.delete(f"/api/attempts/{first['id']}")).status_code == 200
    assert (await client.get(f"/api/attempts/{first['id']}")).status_code == 404
    assert len((await client.get(f"/api/attempts/quiz/{quiz['id']}")).json()) == 1


@pytest.mark.asyncio
async def test_check_single_question(client, quiz):
    q2 = quiz["questions"][1]
    baltic = options_by_text(q2)
    r = await client.post(
        f"/api/quizzes/{quiz['id']}/questions/{q2['id']}/check",
        json={"selected_option_ids": [baltic["Riga"], baltic["Oslo"]]},
    )
    assert r.status_code == 200
    assert r.json()["points_earned"] == 0
    assert r.json()["is_correct"] is False
    missing = await client.post(f"/api/quizzes/{quiz['id']}/questions/nope/check", json={})
    assert missing.status_code == 404
