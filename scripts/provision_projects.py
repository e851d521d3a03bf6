#!/usr/bin/env python3
"""
Script to provision GitHub teams and repositories for started projects.

This script:
1. Loads every accepted project whose start date has passed and has no repository yet
2. Ensures a team exists in the organization and adds the project members to it
3. Creates the repository, grants the team push access and protects main

Usage:
  python scripts/provision_projects.py

Requires GITHUB_ORG_PAT and DATABASE_URL in the environment (or .env).
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.settings import get_settings
from src.infrastructure.db.session import create_engine, create_session_factory
from src.infrastructure.scheduler.provisioning_tasks import run_project_provisioning


async def main() -> int:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    try:
        report = await run_project_provisioning(session_factory, settings=settings)
    finally:
        await engine.dispose()

    if report is None:
        print("❌ Provisioning did not run (check GITHUB_ORG_PAT and logs)")
        return 1

    print(f"{report.message}: {report.processed}")
    for result in report.results:
        if result.success:
            print(f"✅ {result.project}: team={result.team} repo={result.repo}")
        else:
            print(f"⚠️  {result.project}: {result.error}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
