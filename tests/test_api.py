from __future__ import annotations

import json

import pytest

HUND = {
    "translation": "dog",
    "gender": "Masculine",
    "examples": ["Der Hund bellt. (The dog barks.)"],
    "noun_declension_table": {
        "Singular": [{"case": "Nominative", "form": "der Hund"}],
        "Plural": [{"case": "Nominative", "form": "die Hunde"}],
    },
}


@pytest.fixture
def learner(german, auth_headers):
    user, language = german
    return user, language, auth_headers(user)


def _add(client, headers, language_id, word, translation, **extra):
    body = {"word": word, "translation": translation, "language_id": language_id, **extra}
    response = client.post("/entries/words", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_status(client):
    assert client.get("/status").json() == {"status": "ok"}


def test_requests_without_token_are_rejected(client):
    assert client.get("/entries/words").status_code == 401
    assert client.get("/languages").status_code == 401


def test_register_and_login(client):
    body = {"email": "anna@example.com", "username": "anna", "password": "Secret123!", "native_language": "Spanish"}
    registered = client.post("/user/register", json=body)
    assert registered.status_code == 201
    assert registered.json()["username"] == "anna"

    assert client.post("/user/register", json=body).status_code == 400

    login = client.post("/user/login", json={"email": "anna@example.com", "password": "Secret123!"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/user/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["username"] == "anna"

    bad = client.post("/user/login", json={"email": "anna@example.com", "password": "wrong-pass"})
    assert bad.status_code == 401


def test_languages(client, make_user, auth_headers):
    headers = auth_headers(make_user())

    created = client.post("/languages", json={"language_name": "German", "iso_code": " DE "}, headers=headers)
    assert created.status_code == 201
    assert created.json()["iso_code"] == "de"

    duplicate = client.post("/languages", json={"language_name": "Deutsch", "iso_code": "de"}, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "CONFLICT"

    assert client.get("/languages/de", headers=headers).json()["language_name"] == "German"
    missing = client.get("/languages/fr", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"error": "Language not found", "code": "NOT_FOUND"}

    language_id = created.json()["id"]
    assert client.delete(f"/languages/{language_id}", headers=headers).status_code == 204
    assert client.delete(f"/languages/{language_id}", headers=headers).status_code == 404


def test_entry_lifecycle(client, learner):
    _, language, headers = learner
    entry = _add(client, headers, language.id, " Haus ", " house ", tags=["Home", "home"])
    assert entry["word"] == "Haus"
    assert entry["tags"] == ["home"]

    duplicate = client.post(
        "/entries/words", json={"word": "Haus", "translation": "home", "language_id": language.id}, headers=headers
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == 'You\'ve already added "Haus" for this language.'

    blank = client.post(
        "/entries/words", json={"word": "  ", "translation": "x", "language_id": language.id}, headers=headers
    )
    assert blank.status_code == 422

    updated = client.put(
        f"/entries/words/{entry['id']}",
        json={"word": "Haus", "translation": "home", "notes": "das Haus"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["translation"] == "home"
    assert updated.json()["tags"] == ["home"]

    tagged = client.put(f"/entries/words/{entry['id']}/tags", json={"tags": ["Gebäude"]}, headers=headers)
    assert tagged.json()["tags"] == ["gebäude"]

    detail = client.get(f"/entries/words/{entry['id']}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["random_slug"] is None

    assert client.delete(f"/entries/words/{entry['id']}", headers=headers).status_code == 204
    missing = client.delete(f"/entries/words/{entry['id']}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["code"] == "STORAGE_ERROR"


def test_entries_are_owner_scoped(client, learner, make_user, auth_headers):
    _, language, headers = learner
    entry = _add(client, headers, language.id, "Katze", "cat")
    intruder = auth_headers(make_user())

    assert client.get(f"/entries/words/{entry['id']}", headers=intruder).status_code == 404
    assert client.get("/entries/words", headers=intruder).json()["entries"] == []
    forbidden = client.put(
        f"/entries/words/{entry['id']}", json={"word": "Katze", "translation": "hacked"}, headers=intruder
    )
    assert forbidden.status_code == 404
    assert client.get(f"/entries/words/{entry['id']}", headers=headers).json()["translation"] == "cat"


def test_list_sort_uses_profile_preference(client, learner):
    _, language, headers = learner
    for word in ["Banane", "Apfel", "Zug"]:
        _add(client, headers, language.id, word, word.lower())

    def words(params=None):
        body = client.get("/entries/words", params=params, headers=headers).json()
        return body["sort"], [e["word"] for e in body["entries"]]

    assert words() == ("date_desc", ["Zug", "Apfel", "Banane"])
    assert words({"sort": "alpha_asc"}) == ("alpha_asc", ["Apfel", "Banane", "Zug"])

    saved = client.put("/user/settings/sort", json={"sort": "alpha_desc"}, headers=headers)
    assert saved.json()["word_sort_preference"] == "alpha_desc"
    assert words() == ("alpha_desc", ["Zug", "Banane", "Apfel"])
    assert words({"sort": "nonsense"}) == ("alpha_desc", ["Zug", "Banane", "Apfel"])

    invalid = client.put("/user/settings/sort", json={"sort": "newest"}, headers=headers)
    assert invalid.status_code == 422


def test_settings_round_trip(client, learner):
    _, _, headers = learner
    assert client.get("/user/settings", headers=headers).json()["native_language"] == "English"

    body = {"native_language": "German", "theme": "dark", "username": "renamed", "word_sort_preference": "date_asc"}
    response = client.put("/user/settings", json=body, headers=headers)

    assert response.status_code == 200
    assert response.json() == body


def test_random_and_slug_lookup(client, learner):
    _, language, headers = learner
    _add(client, headers, language.id, "Eins", "one")
    _add(client, headers, language.id, "Zwei", "two")

    random_slug = client.get("/entries/words/random", params={"current": "Eins"}, headers=headers).json()
    assert random_slug == {"slug": "Zwei"}

    detail = client.get("/entries/words/slug/Zwei", headers=headers)
    assert detail.json()["translation"] == "two"
    assert detail.json()["random_slug"] == "Eins"
    missing = client.get("/entries/words/slug/Drei", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"


def test_translations_do_not_need_a_language(client, learner):
    _, _, headers = learner
    response = client.post("/entries/translations", json={"word": "good night", "translation": "gute Nacht"}, headers=headers)

    assert response.status_code == 201
    assert response.json()["language_id"] is None


def test_generate_word_details(client, learner, generator):
    _, _, headers = learner
    generator.queue(f"```json\n{json.dumps(HUND)}\n```")
    body = {"wordText": "Hund", "languageName": "German", "options": {"examples": 1}}

    response = client.post("/api/generate-word-details", json=body, headers=headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "translation": "dog", "aiData": HUND}
    assert "English" in generator.calls[0]["system"]


def test_generate_word_details_errors(client, learner, generator):
    _, _, headers = learner
    missing = client.post("/api/generate-word-details", json={"wordText": "Hund"}, headers=headers)
    assert missing.status_code == 400
    assert missing.json()["error"] == "Missing required parameters"

    generator.queue('{"error": "Word not recognized"}')
    body = {"wordText": "xqzt", "languageName": "German", "options": {}}
    unknown = client.post("/api/generate-word-details", json=body, headers=headers)
    assert unknown.status_code == 422
    assert unknown.json()["code"] == "WORD_NOT_RECOGNIZED"

    generator.queue("not json at all")
    broken = client.post("/api/generate-word-details", json=body, headers=headers)
    assert broken.status_code == 502


def test_enriched_entry_has_sections(client, learner, generator):
    _, language, headers = learner
    generator.queue(json.dumps(HUND))

    response = client.post(
        "/entries/words/enriched",
        json={"word": "Hund", "language_id": language.id, "options": {"examples": 1}},
        headers=headers,
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["translation"] == "dog"
    kinds = {section["key"]: section["kind"] for section in body["sections"]}
    assert kinds == {
        "translation": "text",
        "gender": "text",
        "examples": "list",
        "noun_declension_table": "noun_declension",
    }


def test_enriched_entry_failure_persists_nothing(client, learner, generator):
    _, language, headers = learner
    generator.queue('{"error": "Word not recognized"}')

    response = client.post(
        "/entries/words/enriched", json={"word": "xqzt", "language_id": language.id}, headers=headers
    )

    assert response.status_code == 422
    assert client.get("/entries/words", headers=headers).json()["entries"] == []


def test_tags(client, learner):
    _, language, headers = learner
    _add(client, headers, language.id, "Hund", "dog", tags=["tiere"])
    _add(client, headers, language.id, "Katze", "cat", tags=["tiere", "haus"])

    saved = client.put(
        "/tags/Tiere/metadata", json={"icon_name": "PawPrintIcon", "color_class": "tag-color-teal"}, headers=headers
    )
    assert saved.status_code == 200
    assert saved.json() == {"tag_name": "tiere", "icon_name": "PawPrintIcon", "color_class": "tag-color-teal"}

    bad_icon = client.put("/tags/tiere/metadata", json={"icon_name": "NotAnIcon"}, headers=headers)
    assert bad_icon.status_code == 422

    summary = {tag["tag_name"]: tag for tag in client.get("/tags", headers=headers).json()}
    assert summary["tiere"]["word_count"] == 2
    assert summary["tiere"]["icon_name"] == "PawPrintIcon"
    assert summary["haus"]["icon_name"] == "TagIcon"
    assert summary["haus"]["has_metadata"] is False

    grouped = client.get("/tags/tiere/entries", headers=headers).json()
    assert sorted(e["word"] for e in grouped["words"]) == ["Hund", "Katze"]
    assert grouped["translations"] == []

    assert client.delete("/tags/tiere/metadata", headers=headers).status_code == 204
    assert client.delete("/tags/tiere/metadata", headers=headers).status_code == 404


def test_games(client, learner):
    _, language, headers = learner
    _add(client, headers, language.id, "Hund", "dog", ai_data={"gender": "der"})
    _add(client, headers, language.id, "laufen", "to run")

    deck = client.get("/games/article-guesser", headers=headers).json()
    assert deck["total"] == 1
    assert deck["cards"][0]["gender"] == "Masculine"

    memory = client.get("/games/memory-cards", params={"size": 1}, headers=headers).json()
    assert memory["total"] == 1

    assert client.get("/games/crossword", headers=headers).status_code == 404

    check = client.post("/games/quick-recall/check", json={"expected": "der Hund", "answer": "der hund"}, headers=headers)
    assert check.json() == {"correct": True, "expected": "der Hund"}


def test_generate_word_details_ignores_user_id(client, learner, generator):
    _, _, headers = learner
    generator.queue(json.dumps(HUND))
    body = {
        "wordText": "Hund",
        "languageName": "German",
        "options": {},
        "userId": "3f1c2a9d-7b10-4c2e-9a11-0d5e6f7a8b9c",
    }

    response = client.post("/api/generate-word-details", json=body, headers=headers)

    assert response.status_code == 200
    assert response.json()["translation"] == "dog"


@pytest.mark.parametrize("options", [{"level": "Z9"}, {"examples": -1}])
def test_invalid_request_body_uses_error_shape(client, learner, generator, options):
    _, _, headers = learner
    body = {"wordText": "Hund", "languageName": "German", "options": options}

    response = client.post("/api/generate-word-details", json=body, headers=headers)

    assert response.status_code == 422
    payload = response.json()
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["error"] == "Invalid request"
    assert payload["details"][0]["loc"][:2] == ["body", "options"]
    assert generator.calls == []


@pytest.mark.parametrize(
    "body",
    [
        {"word": "Hund", "options": {"translation": False, "grammar": True}},
        {"word": "Hund", "language_name": "German"},
        {"word": "   "},
    ],
)
def test_enriched_entry_validates_before_generation(client, learner, generator, body):
    _, language, headers = learner
    if "language_name" not in body:
        body = {**body, "language_id": language.id}

    response = client.post("/entries/words/enriched", json=body, headers=headers)

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert len(generator.calls) == 0


def test_list_filter_normalizes_tag(client, learner):
    _, language, headers = learner
    _add(client, headers, language.id, "Hund", "dog", tags=["Tiere"])
    _add(client, headers, language.id, "Brot", "bread")

    for tag in ("Tiere", " TIERE ", "tiere"):
        body = client.get("/entries/words", params={"tag": tag}, headers=headers).json()
        assert [e["word"] for e in body["entries"]] == ["Hund"]
