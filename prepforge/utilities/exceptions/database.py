class EntityDoesNotExist(Exception):
    """
    Throw an exception when the data does not exist in the database.
    """
