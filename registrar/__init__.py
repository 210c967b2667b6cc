"""Registrar Backend.

University records service: course registration, drop, transcripts and
grading over a relational schema, with role-based access for students,
instructors and administrators.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
