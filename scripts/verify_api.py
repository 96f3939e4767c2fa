#!/usr/bin/env python
"""
verify_api.py - End-to-end check of a running Outfit Service

Generates an outfit, rates it, and regenerates it from feedback against a
live server. The API key's user must already have at least one top, bottom
and pair of shoes cataloged.

Usage:
    python scripts/verify_api.py [--base-url http://localhost:8000] [--api-key YOUR_KEY]
"""
import sys
import argparse
import requests

# Default config
DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_API_KEY = "test-api-key"
DEFAULT_PROMPT = "Relaxed outfit for a summer afternoon in the city"


def print_result(test_name: str, passed: bool, details: str = ""):
    """Print test result."""
    status = "PASS" if passed else "FAIL"
    print(f"  [{status}] {test_name}")
    if details and not passed:
        print(f"         -> {details}")


def test_health(base_url: str) -> bool:
    """Test /health endpoint."""
    try:
        r = requests.get(f"{base_url}/health", timeout=5)
        return r.status_code == 200
    except requests.RequestException as e:
        print(f"  Health check error: {e}")
        return False


def post_json(base_url: str, path: str, api_key: str, body: dict) -> dict:
    """
    POST a JSON body and collect the outcome.

    Returns dict with status_code, response and error.
    """
    result = {"status_code": None, "response": None, "error": None}

    try:
        r = requests.post(
            f"{base_url}{path}",
            headers={"X-API-Key": api_key},
            json=body,
            timeout=120
        )
        result["status_code"] = r.status_code
        if r.status_code in (200, 201):
            result["response"] = r.json()
        else:
            result["error"] = r.text[:200]
    except requests.RequestException as e:
        result["error"] = str(e)

    return result


def check_outfit_shape(outfit: dict) -> bool:
    """One top, bottom and shoes, at most three misc, all correctly classified."""
    if not outfit:
        return False
    slots_ok = all(
        (outfit.get(slot) or {}).get("classification") == slot
        for slot in ("top", "bottom", "shoes")
    )
    misc = outfit.get("misc") or []
    misc_ok = len(misc) <= 3 and all(item.get("classification") == "misc" for item in misc)
    return slots_ok and misc_ok and bool(outfit.get("name")) and bool(outfit.get("description"))


def run_all_tests(base_url: str, api_key: str, prompt: str):
    """Run the verification sequence."""
    print("\n" + "=" * 60)
    print("OUTFIT SERVICE VERIFICATION")
    print("=" * 60 + "\n")

    all_passed = True

    # Test 1: Health check
    print("[1] Testing /health endpoint...")
    health_ok = test_health(base_url)
    print_result("Health check", health_ok)

    if not health_ok:
        print("\nServer not healthy. Aborting.\n")
        return False

    print()

    # Test 2: Generation
    print("[2] Testing POST /api/outfits...")
    generated = post_json(base_url, "/api/outfits", api_key, {"prompt": prompt})
    outfit = generated["response"]
    print_result("status = 201", generated["status_code"] == 201, generated.get("error") or "")
    print_result("outfit shape", check_outfit_shape(outfit))
    all_passed = all_passed and generated["status_code"] == 201 and check_outfit_shape(outfit)

    if not outfit:
        print("\nGeneration failed. Aborting.\n")
        return False

    print()

    # Test 3: Feedback
    print("[3] Testing rating validation and storage...")
    path = f"/api/outfits/{outfit['outfit_id']}/feedback"
    rejected = post_json(base_url, path, api_key, {"rating": 6})
    print_result("rating 6 rejected with 422", rejected["status_code"] == 422,
                 f"Got {rejected['status_code']}")
    accepted = post_json(base_url, path, api_key, {"rating": 4, "comment": "Nice, but warmer please"})
    print_result("rating 4 stored", accepted["status_code"] == 201, accepted.get("error") or "")
    all_passed = all_passed and rejected["status_code"] == 422 and accepted["status_code"] == 201

    print()

    # Test 4: Regeneration
    print("[4] Testing POST /api/outfits/regenerate...")
    regenerated = post_json(
        base_url, "/api/outfits/regenerate", api_key,
        {"prompt": prompt, "feedback": "Make it warmer"}
    )
    new_outfit = regenerated["response"] or {}
    print_result("status = 201", regenerated["status_code"] == 201, regenerated.get("error") or "")
    print_result("new outfit id", new_outfit.get("outfit_id") not in (None, outfit["outfit_id"]))
    print_result("outfit shape", check_outfit_shape(new_outfit))
    all_passed = all_passed and regenerated["status_code"] == 201 and check_outfit_shape(new_outfit)

    print()

    # Summary
    print("=" * 60)
    if all_passed:
        print("ALL CHECKS PASSED")
    else:
        print("SOME CHECKS FAILED - Review above")
    print("=" * 60 + "\n")

    return all_passed


def main():
    parser = argparse.ArgumentParser(description="Outfit Service Verification Script")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Base URL of API")
    parser.add_argument("--api-key", default=DEFAULT_API_KEY, help="API key for auth")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT, help="Outfit prompt to generate")
    args = parser.parse_args()

    success = run_all_tests(args.base_url, args.api_key, args.prompt)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
