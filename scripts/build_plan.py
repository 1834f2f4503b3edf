"""
Build a plan for one profile and print it as JSON.

Usage
-----

    python -m scripts.build_plan path/to/profile.json

    # Arabic labels, custom dataset file
    python -m scripts.build_plan profile.json --lang ar --knowledge-base kb.json

    # only show the energy target + strategy
    python -m scripts.build_plan profile.json --preview
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from core.knowledge import KnowledgeStore
from core.models import UserProfile
from core.planner import PlanAssembler
from services.gemini import GenerationError


def _load_profile(path: Path) -> UserProfile:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("JSON file must contain a single profile object")
    return UserProfile.model_validate(data)


async def _run(args: argparse.Namespace) -> int:
    store = (
        KnowledgeStore.from_json(args.knowledge_base)
        if args.knowledge_base
        else KnowledgeStore.default()
    )
    assembler = PlanAssembler(store)
    profile = _load_profile(args.profile)

    if args.preview:
        pv = assembler.preview(profile)
        print(json.dumps({"energy_target": pv.energy_target, "strategy": pv.strategy.value}))
        return 0

    try:
        plan = await assembler.build(profile, args.lang)
    except GenerationError as exc:
        print(f"✗ plan generation failed: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(plan.model_dump(), indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("profile", type=Path, help="JSON file with the user profile")
    parser.add_argument("--lang", choices=("en", "ar"), default="en")
    parser.add_argument(
        "--knowledge-base",
        type=Path,
        help="optional dataset JSON (overrides KNOWLEDGE_BASE_PATH / bundled data)",
    )
    parser.add_argument("--preview", action="store_true", help="route only, no plan")
    args = parser.parse_args()
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
