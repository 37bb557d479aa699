"""
Quick smoke test for API endpoints using TestClient.

Checks:
- GET /health
- POST /profile
- POST /analyze (id et en)
"""

import argparse

from fastapi.testclient import TestClient

from cosmic_match.app.main import app


def main() -> None:
    """
    Point d'entrée principal pour les tests de fumée.

    Exécute une série d'appels de base pour vérifier que l'application répond et que le moteur
    reste déterministe d'un appel à l'autre.
    """
    parser = argparse.ArgumentParser(description="Smoke test du service de compatibilité")
    parser.add_argument("--lang", default="en", choices=["id", "en"])
    args = parser.parse_args()

    client = TestClient(app)

    r = client.get("/health")
    print("/health:", r.status_code, r.json())

    person_a = {"name": "Alya", "date": "1995-05-23", "time": "4:30", "location": "Jakarta"}
    person_b = {"name": "Bima", "date": "1997-09-11", "time": "09:50", "location": "Bandung"}

    r = client.post("/profile", json={"person": person_a, "lang": args.lang})
    print("/profile:", r.status_code, {k: r.json().get(k) for k in ("hdType", "hdProfile")})

    payload = {"person_a": person_a, "person_b": person_b, "lang": args.lang}
    first = client.post("/analyze", json=payload)
    second = client.post("/analyze", json=payload)
    report = first.json()["compatibility"]
    print("/analyze:", first.status_code, report["score"], report["headline"])
    print(report["summary"])
    assert first.json() == second.json(), "analysis is not deterministic"

    print("Smoke test OK")


if __name__ == "__main__":
    main()
