"""
SocialHub Backend — Repository Layer
=====================================

What:  All SQL lives here: one repository per table, each bound to the
       request's AsyncSession.

Outcome conventions:
    lookups         → Optional[row]   (None means not found)
    inserts/updates → WriteResult     (CREATED / UPDATED / CONFLICT)
    deletes         → bool            (False when nothing matched)

Repositories never raise application exceptions; services decide what a
None or a CONFLICT means for the caller.
"""
