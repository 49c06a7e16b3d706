from gigcampus.models.rating import UserRatingRecord

__all__ = ["UserRatingRecord"]
