import os

class Config:
    # App settings
    SECRET_KEY = os.environ.get("SECRET_KEY")
    DEV_MODE = os.environ.get("DEV_MODE", "").lower() == "true"

    # Benchmark scoring
    # Upper bound on component records scored per request
    BENCHMARK_MAX_PRODUCTS = int(os.environ.get("BENCHMARK_MAX_PRODUCTS") or "30")

    # Optional YAML file overriding category weights, ceilings and chipset tiers
    BENCHMARK_RULES_PATH = os.environ.get("BENCHMARK_RULES_PATH") or os.path.join("config", "benchmark_rules.yml")
