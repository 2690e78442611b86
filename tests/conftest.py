"""Shared fixtures for aimkit tests."""

from typing import Any

import pytest

from aimkit.schema.legacy import LegacyDocument


@pytest.fixture
def legacy_payload() -> dict[str, Any]:
    """Stored form of a typical legacy document."""
    return {
        "id": "a1",
        "oraNumber": "42",
        "oraName": "Sugartown Oras",
        "oraImage": "https://img.example/42.png",
        "createdAt": "2024-03-01T10:00:00.000Z",
        "updatedAt": "2024-03-02T10:00:00.000Z",
        "characterName": "Nyx",
        "personality": {
            "primaryTraits": ["bold"],
            "secondaryTraits": [],
            "alignment": "Chaotic Good",
            "temperament": "fierce",
            "motivations": [],
            "fears": [],
            "quirks": [],
        },
        "backstory": {
            "origin": "born of void",
            "childhood": "",
            "formativeEvents": [],
            "relationships": [],
            "achievements": [],
            "failures": [],
        },
        "abilities": {
            "strengths": ["speed"],
            "weaknesses": [],
            "specialPowers": [],
            "skills": [],
        },
        "behavior": {
            "speechPatterns": "",
            "mannerisms": [],
            "habits": [],
            "socialStyle": "Introverted",
            "conflictResolution": "",
            "decisionMaking": "",
        },
        "appearance": {
            "distinctiveFeatures": [],
            "clothing": "",
            "accessories": [],
        },
        "goals": {"shortTerm": [], "longTerm": [], "dreams": []},
        "tags": ["demo"],
        "notes": "",
        "version": "1",
    }


@pytest.fixture
def legacy_document(legacy_payload: dict[str, Any]) -> LegacyDocument:
    return LegacyDocument.model_validate(legacy_payload)


@pytest.fixture
def empty_legacy_document() -> LegacyDocument:
    """Legacy document with every optional field left empty."""
    return LegacyDocument.model_validate(
        {
            "id": "empty",
            "characterName": "Blank",
            "personality": {},
            "backstory": {},
            "abilities": {},
            "behavior": {},
            "appearance": {},
        }
    )


@pytest.fixture
def rich_legacy_document(legacy_payload: dict[str, Any]) -> LegacyDocument:
    """Legacy document with every extractable field populated."""
    legacy_payload["personality"].update(
        primaryTraits=["bold", "curious", "loyal", "stubborn"],
        secondaryTraits=["witty", "restless"],
    )
    legacy_payload["backstory"].update(
        childhood="raised by starlight",
        formativeEvents=["the eclipse", "the fall"],
    )
    legacy_payload["abilities"].update(specialPowers=["shadow step", "void sight"])
    legacy_payload["behavior"]["speechPatterns"] = "whispers in riddles"
    legacy_payload["appearance"].update(
        height="tall",
        build="wiry",
        distinctiveFeatures=["silver eyes", "scarred hand"],
    )
    return LegacyDocument.model_validate(legacy_payload)
