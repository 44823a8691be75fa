# Importing the package registers every model with Base so relationships resolve
from unisport.models.user import User
from unisport.models.venue import Venue
from unisport.models.court_type import CourtType
from unisport.models.court import Court
from unisport.models.court_mapping import CourtMapping
from unisport.models.booking import Booking
from unisport.models.notification import Notification
