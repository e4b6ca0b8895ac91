#!/usr/bin/env python3
import argparse

import httpx


SAMPLE_PROJECTS = [
    {
        "name": "Site Migration",
        "description": "Moved legacy site to new stack",
        "learnings": "Learned caching strategies",
        "type": "success",
    },
    {
        "name": "Beta Launch",
        "description": "Rushed launch",
        "learnings": "Underestimated QA time",
        "type": "failure",
        "fixPlan": "Added staging gate",
    },
]


def main() -> None:
    parser = argparse.ArgumentParser(description="End-to-end check of pitch generation against a running backend.")
    parser.add_argument("--api-base", default="http://127.0.0.1:8000", help="Backend base URL.")
    parser.add_argument("--timeout-seconds", type=float, default=120.0, help="HTTP timeout for the pitch call.")
    args = parser.parse_args()

    with httpx.Client(timeout=args.timeout_seconds, trust_env=False) as client:
        health = client.get(f"{args.api_base}/health")
        health.raise_for_status()
        if not health.json().get("provider_configured"):
            raise RuntimeError("Backend has no PITCH_LLM_API_KEY configured.")

        created_ids = []
        for project in SAMPLE_PROJECTS:
            create_resp = client.post(f"{args.api_base}/api/projects", json=project)
            create_resp.raise_for_status()
            created_ids.append(create_resp.json()["id"])
            print(f"created project: {created_ids[-1]} ({project['type']})")

        try:
            pitch_resp = client.post(f"{args.api_base}/api/pitch")
            if pitch_resp.status_code != 200:
                raise RuntimeError(f"Pitch generation failed ({pitch_resp.status_code}): {pitch_resp.text}")
            result = pitch_resp.json()["result"]
            if not result["pitch"].strip():
                raise RuntimeError("Pitch text is empty.")
            print(result["pitch"])
            print("key strengths:")
            for strength in result["keyStrengths"]:
                print(f"- {strength}")
        finally:
            for project_id in created_ids:
                client.delete(f"{args.api_base}/api/projects/{project_id}")

    print("pitch smoke test passed")


if __name__ == "__main__":
    main()
