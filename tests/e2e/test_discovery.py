"""End-to-end tests for skill declarations and discovery."""

from tests.di.catalog import GUITAR, PYTHON


class TestDiscovery:
    """End-to-end tests for discovery routes."""

    def test_declare_then_found_as_teacher(self, client_for, alice, bob):
        teacher = client_for(alice)

        declared = teacher.post(
            "/me/skills",
            json={"skill_id": str(GUITAR.id), "role": "teach", "proficiency_level": 8},
        )
        found = client_for(bob).get(f"/skills/{GUITAR.id}/teachers")
        own = teacher.get(f"/skills/{GUITAR.id}/teachers")

        assert declared.status_code == 201
        assert declared.json()["proficiency_label"] == "Expert+"
        assert [c["user_id"] for c in found.json()["candidates"]] == [str(alice)]
        assert own.json()["candidates"] == []

    def test_duplicate_declaration_conflicts(self, client_for, alice):
        client = client_for(alice)
        body = {"skill_id": str(PYTHON.id), "role": "learn", "proficiency_level": 2}

        client.post("/me/skills", json=body)
        response = client.post("/me/skills", json=body)

        assert response.status_code == 409

    def test_update_and_delete_own_declaration(self, client_for, alice, bob):
        client = client_for(alice)
        declaration_id = client.post(
            "/me/skills",
            json={"skill_id": str(GUITAR.id), "role": "teach", "proficiency_level": 3},
        ).json()["declaration_id"]

        foreign = client_for(bob).patch(
            f"/me/skills/{declaration_id}", json={"proficiency_level": 10}
        )
        updated = client.patch(f"/me/skills/{declaration_id}", json={"proficiency_level": 4})
        deleted = client.delete(f"/me/skills/{declaration_id}")
        listed = client_for(bob).get(f"/users/{alice}/skills")

        assert foreign.status_code == 403
        assert updated.json()["proficiency_level"] == 4
        assert deleted.status_code == 204
        assert listed.json()["declarations"] == []

    def test_unknown_skill_is_integrity_error(self, client_for, alice):
        response = client_for(alice).get(f"/skills/{alice}/learners")

        assert response.status_code == 500
        assert response.json()["error"] == "SkillNotFoundError"
