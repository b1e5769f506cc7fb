"""Import a pasted booking message from a text file."""

import argparse
import asyncio
import sys
from pathlib import Path

from tourdesk.database import AsyncSessionLocal
from tourdesk.importers import BookingTextParser, ParsedGroup
from tourdesk.services.group_importer import GroupImporter, ImportFailedError


def print_preview(group: ParsedGroup) -> None:
    """Print a parsed group the way operators check it before importing."""
    print(
        f"{group.date.isoformat()}  {group.time}  Group {group.group_number}  "
        f"({group.total_participants} participants, {len(group.bookings)} bookings found)\n"
    )
    for b in group.bookings:
        print(
            f"  {b.booking_reference:<14} {b.customer_name:<30} "
            f"{b.number_of_people:>2}  {b.language:<10} {b.meeting_point}"
        )
    print()


async def import_file(
    path: Path,
    created_by: str,
    guide_id: str | None = None,
    dry_run: bool = False,
) -> bool:
    """Parse a file and store it unless dry_run is set. Returns True on success."""
    group = BookingTextParser().parse(path.read_text(encoding="utf-8"))
    if group is None:
        print(f"Could not parse {path}. Please check the format.")
        return False

    print_preview(group)
    if dry_run:
        print("Dry run, nothing stored.")
        return True

    async with AsyncSessionLocal() as db:
        importer = GroupImporter(db)
        group_number = None
        if guide_id:
            group_number = await importer.resolve_group_number(guide_id, group.date)
        try:
            stored = await importer.import_group(
                group, created_by=created_by, guide_id=guide_id, group_number=group_number
            )
            await db.commit()
        except ImportFailedError as e:
            print(f"Import failed: {e}")
            return False

    print(f"Stored group {stored.id} with {len(group.bookings)} bookings.")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Import a booking message (as pasted from the messaging app) into a group."
    )
    parser.add_argument("file", type=Path, help="Text file containing the booking message")
    parser.add_argument(
        "--created-by",
        default="cli",
        metavar="ID",
        help="Account id recorded as the creator (default: cli)",
    )
    parser.add_argument(
        "--guide-id",
        default=None,
        metavar="ID",
        help="Guide leading the group; their daily assignment sets the group number",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the parse preview",
    )
    args = parser.parse_args()

    ok = asyncio.run(import_file(args.file, args.created_by, args.guide_id, args.dry_run))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
