class _Unknown:
    """Slot value for a player who has not been determined yet."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNKNOWN"


UNKNOWN = _Unknown()


def is_known(slot):
    """Return True if a player slot holds an actual seed."""
    return slot is not UNKNOWN


class FFAInternalError(RuntimeError):
    """Raised when bracket construction or standings hit a broken invariant."""


class MatchId:
    def __init__(self, section, round, match=None):
        self.section = section
        self.round = round
        self.match = match  # None while the next round is still being decided

    def __eq__(self, other):
        if not isinstance(other, MatchId):
            return NotImplemented
        return (self.section, self.round, self.match) == (other.section, other.round, other.match)

    def __hash__(self):
        return hash((self.section, self.round, self.match))

    def __str__(self):
        if not self.match:
            return f"R{self.round} M X"
        return f"R{self.round} M{self.match}"

    def __repr__(self):
        return f"MatchId(section={self.section}, round={self.round}, match={self.match})"


class Match:
    def __init__(self, id, players, scores=None):
        self.id = id
        self.players = players
        self.scores = scores  # aligned by index with players once played

    @property
    def is_scored(self):
        return self.scores is not None

    def __repr__(self):
        return f"Match(id={self.id}, players={self.players}, scores={self.scores})"


class BracketConfig:
    def __init__(self, num_players, group_sizes, advancers, limit=0):
        self.num_players = num_players
        self.group_sizes = list(group_sizes)
        self.advancers = list(advancers)
        self.limit = limit

    @classmethod
    def from_dict(cls, data):
        """
        Build a config from a settings mapping.

        Accepts snake_case keys as written in YAML files, plus the camelCase
        spellings (numPlayers, groupSizes) and the short 'sizes' alias.
        """
        num_players = data.get('num_players', data.get('numPlayers'))
        group_sizes = data.get('group_sizes', data.get('groupSizes', data.get('sizes')))
        advancers = data.get('advancers')
        missing = [name for name, value in (
            ('num_players', num_players),
            ('group_sizes', group_sizes),
            ('advancers', advancers),
        ) if value is None]
        if missing:
            raise ValueError(f"Bracket settings missing required keys: {', '.join(missing)}")
        return cls(num_players, group_sizes, advancers, data.get('limit', 0) or 0)

    def to_dict(self):
        return {
            'num_players': self.num_players,
            'group_sizes': list(self.group_sizes),
            'advancers': list(self.advancers),
            'limit': self.limit,
        }

    def __eq__(self, other):
        if not isinstance(other, BracketConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"BracketConfig(num_players={self.num_players}, group_sizes={self.group_sizes}, "
                f"advancers={self.advancers}, limit={self.limit})")
