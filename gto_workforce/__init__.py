"""GTO Workforce.

Back-office service for a Group Training Organisation (GTO): the body that
employs apprentices and trainees and places them with host employers.

High-level architecture
-----------------------

The codebase is organized as a conventional three-tier web service:

- **API layer** (``gto_workforce.server``): FastAPI routers under ``/api/v1``
  covering apprentices, host employers, placements, timesheets, compliance,
  WHS incidents, funding claims, rates and financial reporting.
- **Service layer** (``gto_workforce.server.services``): business workflows such
  as charge-rate calculation, award-rate lookup, claim status transitions and
  dashboard aggregation.
- **Persistence** (``gto_workforce.core.database``): SQLModel entities and async
  repositories over SQLAlchemy.

Core subpackages
----------------

- ``gto_workforce.core``:

  - Logging and optional Logfire monitoring.
  - Field validators and business rules (award minimums, ABN checksum,
    apprentice status transitions, working-hour limits).
  - Database entities, repositories and I/O schemas.

- ``gto_workforce.fairwork``:

  - Async client for the FairWork award interpretation API, with a TTL-cached
    facade and local fallback calculations for apprentice rates.
"""
