from .util import helper


class User:
    pass
