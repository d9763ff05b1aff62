"""
Script to resync every contact's primary_company_id with its primary area of activity.
Repairs pointers left stale by partially applied associate/disassociate requests.
Run with: python reconcile_primary_companies.py [--dry-run]
"""

import argparse
import asyncio

from crm_relations.core.exceptions import AppException
from crm_relations.db import session as db_session
from crm_relations.db.repositories.area_of_activity_repository import AreaOfActivityRepository
from crm_relations.db.repositories.contact_repository import ContactRepository
from crm_relations.services.consistency_coordinator import ConsistencyCoordinator


async def reconcile_all(dry_run: bool = False) -> int:
    """Reconcile every contact. Returns the number of contacts that were (or would be) changed."""
    await db_session.init_db()
    changed = 0
    failed = 0

    try:
        async with db_session.async_session_maker() as session:
            contact_repo = ContactRepository(session)
            area_repo = AreaOfActivityRepository(session)
            coordinator = ConsistencyCoordinator(session)

            contact_ids = await contact_repo.list_ids()
            print(f"Checking {len(contact_ids)} contacts")

            for contact_id in contact_ids:
                contact = await contact_repo.get(contact_id)
                primary = await area_repo.get_primary(contact_id)
                expected = primary.company_id if primary else None
                if contact.primary_company_id == expected:
                    continue

                print(f"Contact {contact_id}: primary_company_id {contact.primary_company_id} -> {expected}")
                changed += 1
                if dry_run:
                    continue
                try:
                    await coordinator.reconcile_contact(contact_id)
                except AppException as e:
                    failed += 1
                    print(f"  Failed: {e.message}")
    finally:
        await db_session.close_db()

    verb = "Would update" if dry_run else "Updated"
    print(f"\n{verb} {changed - failed} contacts ({failed} failed)")
    return changed


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="Report stale contacts without writing")
    args = parser.parse_args()
    asyncio.run(reconcile_all(dry_run=args.dry_run))


if __name__ == "__main__":
    main()
