import logging

logger = logging.getLogger(__name__)


class FinancialAssumptionsService:
    """
    Statutory figures used by the projection engine. Currently static;
    only the RMD rules are needed.
    """

    # SECURE 2.0 Act raised the RMD age to 73 (75 from 2033).
    RMD_START_AGE = 73

    # IRS Uniform Lifetime Table (in effect from 2022)
    RMD_UNIFORM_LIFETIME_TABLE = {
        72: 27.4, 73: 26.5, 74: 25.5,
        75: 24.6, 76: 23.7, 77: 22.9, 78: 22.0, 79: 21.1,
        80: 20.2, 81: 19.4, 82: 18.5, 83: 17.7, 84: 16.8,
        85: 16.0, 86: 15.2, 87: 14.4, 88: 13.7, 89: 12.9,
        90: 12.2, 91: 11.5, 92: 10.8, 93: 10.1, 94: 9.5,
        95: 8.9,  96: 8.4,  97: 7.8,  98: 7.3,  99: 6.8,
        100: 6.4, 101: 6.0, 102: 5.6, 103: 5.2, 104: 4.9,
        105: 4.6, 106: 4.3, 107: 4.1, 108: 3.9, 109: 3.7,
        110: 3.5, 111: 3.4, 112: 3.3, 113: 3.1, 114: 3.0,
        115: 2.9, 116: 2.8, 117: 2.7, 118: 2.5, 119: 2.3,
        120: 2.0 # And older
    }

    def get_rmd_divisor(self, age: int) -> float:
        """
        Returns the RMD divisor for a given age based on the IRS Uniform Lifetime Table.
        Returns 0 below the RMD start age.
        """
        if age < self.RMD_START_AGE:
            return 0.0

        last_age = max(self.RMD_UNIFORM_LIFETIME_TABLE)
        if age >= last_age:
            return self.RMD_UNIFORM_LIFETIME_TABLE[last_age]

        return self.RMD_UNIFORM_LIFETIME_TABLE[age]

    def calculate_rmd(self, balance: float, age: int) -> float:
        """
        Required minimum distribution for a pre-tax balance at `age`.
        Zero before the start age or when there is nothing to distribute.
        """
        if balance <= 0:
            return 0.0

        divisor = self.get_rmd_divisor(age)
        if divisor <= 0:
            return 0.0

        rmd = balance / divisor
        logger.debug(f"RMD at age {age}: {balance:.2f} / {divisor} = {rmd:.2f}")
        return rmd
