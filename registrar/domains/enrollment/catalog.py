# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Section descriptions shared by the registration and grading reads."""

from typing import Optional

from registrar.domains.enrollment.interfaces import Directory, EnrollmentLedger
from registrar.domains.enrollment.types import SectionRecord
from registrar.models.enrollment import SectionListing


async def meeting_time(directory: Directory, section: SectionRecord) -> tuple[list[str], Optional[str]]:
    """Get a section's weekdays and ``HH:MM-HH:MM`` time.

    Sections without a time slot meet on no days at no time.
    """
    if section.time_slot_id is None:
        return [], None
    slot = await directory.get_time_slot(section.time_slot_id)
    return sorted(slot.days), slot.format_time()


async def describe_sections(
    directory: Directory,
    ledger: EnrollmentLedger,
    sections: list[SectionRecord],
) -> list[SectionListing]:
    """Describe sections with course, meeting time and seat counts.

    Args:
        directory: Read access to university records.
        ledger: Source of enrollment counts.
        sections: Sections to describe, in the order to return them.

    Returns:
        One listing per section.
    """
    listings = []
    for section in sections:
        course = await directory.get_course(section.course_id)
        capacity = await directory.get_classroom_capacity(section.building, section.room_number)
        enrolled = await ledger.count_section_enrollment(section.id)
        days, time = await meeting_time(directory, section)
        listings.append(
            SectionListing(
                section_id=section.id,
                course_id=course.id,
                title=course.title,
                credits=float(course.credits),
                semester=section.semester,
                year=section.year,
                building=section.building,
                room_number=section.room_number,
                days=days,
                time=time,
                capacity=capacity,
                enrolled=enrolled,
                available=max(capacity - enrolled, 0),
            )
        )
    return listings
