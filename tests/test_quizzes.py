"""Tests for quiz creation, import/export, sharing and deletion."""

import pytest

from tests.conftest import make_question, make_quiz


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_create_reports_all_violations(client):
    bad = make_quiz(title="Hi", questions=[make_question("Short", [("A", False), ("a", False)])])
    r = await client.post("/api/quizzes", json=bad)
    assert r.status_code == 400
    assert r.json()["detail"]["errors"] == [
        "Quiz title must be at least 3 characters",
        "Question 1: at least one correct answer is required",
        "Question 1: option texts must be unique",
    ]


@pytest.mark.asyncio
async def test_create_assigns_ids_and_share_code(client, quiz):
    assert quiz["share_code"] == "QUIZ-00000001"
    q1, q2 = quiz["questions"]
    assert q1["position"] == 0 and q2["position"] == 1
    assert q2["type"] == "multiple"
    assert all(option["id"] for option in q2["options"])


@pytest.mark.asyncio
async def test_create_with_explicit_share_code(client):
    r = await client.post(
        "/api/quizzes", json=make_quiz(auto_generate_share_code=False, share_code="MY-CODE")
    )
    assert r.json()["share_code"] == "MY-CODE"
    shared = await client.get("/api/quizzes/shared/MY-CODE")
    assert shared.json()["id"] == r.json()["id"]


@pytest.mark.asyncio
async def test_list_includes_attempt_stats(client, quiz):
    q1 = quiz["questions"][0]
    paris = q1["options"][0]["id"]
    await client.post(
        "/api/attempts",
        json={"quiz_id": quiz["id"], "mode": "end", "answers": [{"question_id": q1["id"], "selected_option_ids": [paris]}]},
    )
    await client.post("/api/attempts", json={"quiz_id": quiz["id"], "mode": "end", "answers": []})

    [item] = (await client.get("/api/quizzes")).json()
    assert item["question_count"] == 2
    assert item["attempt_count"] == 2
    assert item["best_score"] == 50.0
    assert item["last_attempt"] is not None

    detail = (await client.get(f"/api/quizzes/{quiz['id']}")).json()
    assert detail["quiz"]["id"] == quiz["id"]
    assert len(detail["attempts"]) == 2


@pytest.mark.asyncio
async def test_rename(client, quiz):
    r = await client.put(f"/api/quizzes/{quiz['id']}", json={"title": "Capitals revisited"})
    assert r.status_code == 200
    assert r.json()["title"] == "Capitals revisited"
    assert r.json()["questions"] == quiz["questions"]

    short = await client.put(f"/api/quizzes/{quiz['id']}", json={"title": "Hi"})
    assert short.status_code == 400
    missing = await client.put("/api/quizzes/nope", json={"title": "Valid title"})
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_export_then_import(client, quiz):
    r = await client.get(f"/api/quizzes/{quiz['id']}/export")
    assert r.status_code == 200
    assert r.headers["content-disposition"] == 'attachment; filename="Capitals_of_Europe.json"'
    exported = r.json()
    assert "id" not in exported["questions"][0]["options"][0]

    imported = await client.post("/api/quizzes/import", json=exported)
    assert imported.status_code == 201
    body = imported.json()
    assert body["id"] != quiz["id"]
    assert body["share_code"] is None
    assert [q["text"] for q in body["questions"]] == [q["text"] for q in quiz["questions"]]


@pytest.mark.asyncio
async def test_import_accepts_exported_camel_case_file(client):
    payload = {
        "title": "Oceans",
        "description": "Exported from the quiz list",
        "timeLimit": 15,
        "tags": ["geo"],
        "questions": [
            {
                "question": "Largest ocean?",
                "hint": "It covers a third of the planet",
                "imageUrl": "/uploads/ocean.png",
                "answerOptions": [
                    {"text": "Pacific", "isCorrect": True, "rationale": "About 165 million km2"},
                    {"text": "Indian", "isCorrect": False, "rationale": ""},
                ],
            },
            {
                "question": "Which border Africa?",
                "hint": "",
                "imageUrl": "",
                "answerOptions": [
                    {"text": "Atlantic", "isCorrect": True, "rationale": "", "imageUrl": "/uploads/a.png"},
                    {"text": "Indian", "isCorrect": True, "rationale": ""},
                    {"text": "Arctic", "isCorrect": False, "rationale": ""},
                ],
            },
        ],
    }
    r = await client.post("/api/quizzes/import", json=payload)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["time_limit"] == 15
    first, second = body["questions"]
    assert first["text"] == "Largest ocean?"
    assert first["image_url"] == "/uploads/ocean.png"
    assert [o["is_correct"] for o in first["options"]] == [True, False]
    assert first["type"] == "single"
    assert second["type"] == "multiple"
    assert second["options"][0]["image_url"] == "/uploads/a.png"


@pytest.mark.asyncio
async def test_import_validates(client):
    r = await client.post("/api/quizzes/import", json={"title": "Nothing here"})
    assert r.status_code == 400
    assert r.json()["detail"]["errors"] == ["Quiz must have at least one question"]


@pytest.mark.asyncio
async def test_share_is_stable(client):
    created = (await client.post("/api/quizzes", json=make_quiz(auto_generate_share_code=False))).json()
    assert created["share_code"] is None
    first = await client.post(f"/api/quizzes/{created['id']}/share")
    second = await client.post(f"/api/quizzes/{created['id']}/share")
    assert first.json()["share_code"] == second.json()["share_code"] == "QUIZ-00000001"
    assert (await client.get("/api/quizzes/shared/QUIZ-FFFFFFFF")).status_code == 404


@pytest.mark.asyncio
async def test_duplicate_gets_fresh_ids(client, quiz):
    r = await client.post(f"/api/quizzes/{quiz['id']}/duplicate")
    assert r.status_code == 201
    copy = r.json()
    assert copy["title"] == "Capitals of Europe (Copy)"
    assert copy["share_code"] is None
    assert {q["id"] for q in copy["questions"]}.isdisjoint({q["id"] for q in quiz["questions"]})
    assert [q["type"] for q in copy["questions"]] == ["single", "multiple"]


@pytest.mark.asyncio
async def test_delete_cascades(client, quiz):
    await client.post(f"/api/progress/{quiz['id']}", json={"mode": "end"})
    await client.post("/api/attempts", json={"quiz_id": quiz["id"], "mode": "end", "answers": []})

    r = await client.delete(f"/api/quizzes/{quiz['id']}")

    assert r.status_code == 200
    assert (await client.get(f"/api/quizzes/{quiz['id']}")).status_code == 404
    assert (await client.get(f"/api/progress/{quiz['id']}")).json() is None
    assert (await client.get(f"/api/attempts/quiz/{quiz['id']}")).json() == []
    assert (await client.delete(f"/api/quizzes/{quiz['id']}")).status_code == 404
