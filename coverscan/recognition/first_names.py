"""
First Name Dictionary

Static set of common human first names used to recognise author lines
on book covers. Sources: US Census / SSA top names plus names seen on
author bylines during testing.
"""

from typing import Iterable, Optional


COMMON_FIRST_NAMES = frozenset({
    # Male names (top 100)
    "james", "robert", "john", "michael", "david", "william", "richard", "joseph",
    "thomas", "christopher", "charles", "daniel", "matthew", "anthony", "mark",
    "donald", "steven", "andrew", "paul", "joshua", "kenneth", "kevin", "brian",
    "george", "timothy", "ronald", "jason", "edward", "jeffrey", "ryan", "jacob",
    "gary", "nicholas", "eric", "jonathan", "stephen", "larry", "justin", "scott",
    "brandon", "benjamin", "samuel", "gregory", "alexander", "patrick", "frank",
    "raymond", "jack", "dennis", "jerry", "tyler", "aaron", "jose", "adam",
    "nathan", "henry", "zachary", "douglas", "peter", "kyle", "noah", "ethan",
    "jeremy", "walter", "christian", "keith", "roger", "terry", "sean", "austin",
    "gerald", "carl", "harold", "dylan", "arthur", "lawrence", "jordan", "jesse",
    "bryan", "billy", "bruce", "gabriel", "joe", "logan", "alan", "juan", "albert",
    "willie", "elijah", "wayne", "randy", "vincent", "mason", "roy", "ralph",
    "bobby", "russell", "bradley", "philip", "eugene",

    # Female names (top 100)
    "mary", "patricia", "jennifer", "linda", "elizabeth", "barbara", "susan",
    "jessica", "sarah", "karen", "lisa", "nancy", "betty", "sandra", "margaret",
    "ashley", "kimberly", "emily", "donna", "michelle", "carol", "amanda",
    "melissa", "deborah", "stephanie", "dorothy", "rebecca", "sharon", "laura",
    "cynthia", "amy", "kathleen", "angela", "shirley", "brenda", "emma", "anna",
    "pamela", "nicole", "samantha", "katherine", "christine", "helen", "debra",
    "rachel", "carolyn", "janet", "maria", "catherine", "heather", "diane",
    "olivia", "julie", "joyce", "victoria", "ruth", "virginia", "lauren", "kelly",
    "christina", "joan", "evelyn", "judith", "andrea", "hannah", "cheryl", "megan",
    "jacqueline", "martha", "madison", "teresa", "gloria", "janice", "sara", "ann",
    "abigail", "kathryn", "sophia", "frances", "jean", "judy", "alice", "isabella",
    "julia", "grace", "denise", "amber", "beverly", "danielle", "marilyn",
    "charlotte", "theresa", "natalie", "diana", "brittany", "doris", "kayla",
    "alexis", "lori", "marie",

    # Classic and international author first names
    "agatha", "ernest", "franz", "leo", "fyodor", "oscar", "edgar", "jules",
    "victor", "alexandre", "jane", "anne", "sylvia", "harper", "toni", "maya",
    "zora", "ursula", "octavia", "flannery", "carson", "eudora", "willa", "edith",
    "kate", "pearl", "daphne", "iris", "muriel", "ngaio", "p.d.", "sue",
    "minette", "val",

    # German / European
    "heinrich", "johann", "wolfgang", "friedrich", "ludwig", "hermann", "hans",
    "karl", "ernst", "wilhelm", "gottfried", "rainer", "stefan", "günter",
    "bertolt", "max", "georg", "erich", "sigmund",

    # British
    "nigel", "graham", "colin", "ian", "hugh", "clive", "trevor", "derek", "barry",
    "geoffrey", "neville", "reginald", "alistair", "hamish", "angus", "rupert",

    # Diminutives and variants
    "mike", "chris", "dan", "matt", "tony", "steve", "andy", "josh", "ken", "tim",
    "tom", "bob", "bill", "rick", "jim", "sam", "ben", "nick", "alex", "pat",
    "liz", "beth", "jen", "meg", "kim", "deb", "becky", "vicky",

    # Seen on covers during testing
    "craig", "morris", "riley", "dean", "lee", "ray", "neil", "glen", "ross",
    "lloyd", "cecil", "clyde", "lynn", "dale", "perry", "cody", "chad", "wade",
    "brett", "blake", "drew", "troy", "seth", "ivan", "omar", "kurt", "leon",
    "luis", "earl", "gene", "joel", "lyle", "marc", "neal", "todd", "dana",
    "jill", "tina", "gail", "vera", "faye", "nina", "rosa", "alma", "ida", "ivy",
    "ada", "ora", "eva", "ava", "mia", "zoe",
})


class NameDictionary:
    """
    Case-insensitive, read-only lookup of known first names.

    Built once at startup and injected into the candidate extractor.

    Usage:
        names = NameDictionary()
        names.is_first_name("Agatha")   # True
        names.is_first_name("J.")       # False
    """

    def __init__(self, extra_names: Optional[Iterable[str]] = None):
        names = set(COMMON_FIRST_NAMES)
        if extra_names:
            names.update(name.strip().lower() for name in extra_names if name.strip())
        self._names = frozenset(names)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_first_name(word)

    def __len__(self) -> int:
        return len(self._names)

    def is_first_name(self, word: str) -> bool:
        """Check a token, ignoring case and trailing initial punctuation."""
        if not word:
            return False
        lowered = word.lower()
        # "P.D." style initials are stored with their dots
        if lowered in self._names:
            return True
        return lowered.replace(".", "").replace(",", "") in self._names
