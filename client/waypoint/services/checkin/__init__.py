"""Check-in seat assignment.

Modules:
    seat_inventory  snapshot + per-seat state machine (Available / Selected / Assigned / Occupied)
    matcher         preference-driven seat recommendation and display price
    session         find booking → inventory → recommendation; serialized seat assignment
"""
