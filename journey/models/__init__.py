from .trips.trip_model import Trip
from .trips.participant import Participant
from .itinerary.activity import Activity
