"""Outfit Service Health Check"""
print("=" * 60)
print("OUTFIT SERVICE HEALTH CHECK")
print("=" * 60)

errors = []
warnings = []

# 1. Core Imports
try:
    from outfit_service.app.main import app
    print("[OK] FastAPI app loads")
except Exception as e:
    errors.append(f"FastAPI app: {e}")
    print(f"[FAIL] FastAPI app: {e}")

# 2. Routes
try:
    from outfit_service.app.routes import router
    print(f"[OK] API routes load ({len(router.routes)} routes)")
except Exception as e:
    errors.append(f"Routes: {e}")
    print(f"[FAIL] Routes: {e}")

# 3. Orchestrator
try:
    from outfit_service.core.orchestrator import generate_outfit, regenerate_outfit
    print("[OK] Orchestrator loads")
except Exception as e:
    errors.append(f"Orchestrator: {e}")
    print(f"[FAIL] Orchestrator: {e}")

# 4. Ranking
try:
    from outfit_service.core.ranking import cosine_similarity
    score = cosine_similarity([1.0, 0.0], [1.0, 0.0])
    print(f"[OK] Ranking ready (self-similarity={score:.3f})")
except Exception as e:
    errors.append(f"Ranking: {e}")
    print(f"[FAIL] Ranking: {e}")

# 5. Config
try:
    from outfit_service.config import get_settings, get_all_configs_dict
    settings = get_settings()
    roles = ", ".join(get_all_configs_dict().keys())
    print(f"[OK] Config loads (roles: {roles})")
    if not settings.has_openai():
        warnings.append("OPENAI_API_KEY not set")
        print("[WARN] OPENAI_API_KEY not set (generation will fail)")
except Exception as e:
    errors.append(f"Config: {e}")
    print(f"[FAIL] Config: {e}")

# 6. MongoDB
try:
    from outfit_service.db import mongo
    connected = mongo.connect()
    if connected:
        print("[OK] MongoDB connected")
    else:
        warnings.append("MongoDB not connected")
        print("[WARN] MongoDB not connected")
except Exception as e:
    warnings.append(f"MongoDB: {e}")
    print(f"[WARN] MongoDB: {e}")

# 7. Validation
try:
    from outfit_service.core.validation import MAX_PROMPT_LENGTH, MIN_RATING, MAX_RATING
    print(f"[OK] Validation ready (prompt<={MAX_PROMPT_LENGTH}, rating {MIN_RATING}-{MAX_RATING})")
except Exception as e:
    errors.append(f"Validation: {e}")
    print(f"[FAIL] Validation: {e}")

print("")
print("=" * 60)
print("SUMMARY")
print("=" * 60)
print(f"Errors:   {len(errors)}")
print(f"Warnings: {len(warnings)}")
if len(errors) == 0:
    print("")
    print(">>> SYSTEM READY TO RUN <<<")
else:
    print("")
    print(">>> SYSTEM HAS ERRORS <<<")
    for e in errors:
        print(f"  - {e}")
