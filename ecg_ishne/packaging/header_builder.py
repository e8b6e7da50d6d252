"""Header builder for ECG ISHNE system."""

import logging
from typing import Any, Optional, Sequence, Union
from pydantic import ValidationError as PydanticValidationError

from ..core.config import Config
from ..core.dates import DateLike, TimeLike, parse_date, parse_time
from ..core.exceptions import ECGISHNEError, ParseError, ValidationError
from ..core.layout import MAX_LEADS
from ..core.models import FixedBlock, Header, Sex, VariableBlock


logger = logging.getLogger(__name__)

SEX_CODES = {
    "Man": Sex.MAN,
    "Woman": Sex.WOMAN,
}

# Code ranges from the ISHNE lead specification and lead quality tables;
# -9 marks an absent lead.
LEAD_SPEC_RANGE = (-9, 19)
LEAD_QUALITY_RANGE = (-9, 5)
RESOLUTION_RANGE = (0, 32767)
PACEMAKER_RANGE = (0, 5)
SAMPLING_RATE_RANGE = (1, 65535)

DEFAULT_SAMPLING_RATE = 250


def _describe(error: PydanticValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    return details[0].get("msg", str(error))


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid header number
    return isinstance(value, int) and not isinstance(value, bool)


class HeaderBuilder:
    """
    Stages and validates header fields.

    Setters return ``True`` when the value is stored and ``False`` when it
    is rejected. A rejected value never changes the staged header; the
    reason is kept in ``last_error``.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize header builder.

        Args:
            config: Configuration object (defaults used when omitted)
        """
        self.config = config if config is not None else Config.create_default()
        self._header = Header(fixed=FixedBlock(
            file_version=self.config.ishne.file_version,
            sampling_rate=self.config.ishne.sampling_rate,
        ))
        self.last_error: Optional[ECGISHNEError] = None

    @property
    def header(self) -> Header:
        """Independent copy of the staged header."""
        return self._header.model_copy(deep=True)

    def _accept(self) -> bool:
        self.last_error = None
        return True

    def _reject(self, error: ECGISHNEError) -> bool:
        self.last_error = error
        logger.warning("Rejected header value: %s", error)
        return False

    def _assign(self, field: str, value: Any) -> bool:
        try:
            setattr(self._header.fixed, field, value)
        except PydanticValidationError as e:
            return self._reject(ValidationError(f"Invalid {field}: {_describe(e)}"))
        return self._accept()

    def _assign_int(self, field: str, value: int) -> bool:
        if not _is_int(value):
            return self._reject(ValidationError(f"{field} must be an integer, got {value!r}"))
        return self._assign(field, value)

    def _assign_in_range(self, field: str, value: int, bounds: Sequence[int]) -> bool:
        low, high = bounds
        if not _is_int(value) or not low <= value <= high:
            return self._reject(ValidationError(f"{field} must be between {low} and {high}, got {value!r}"))
        return self._assign(field, value)

    def _assign_lead_values(self, field: str, values: Sequence[int], bounds: Sequence[int]) -> bool:
        values = list(values)
        if len(values) > MAX_LEADS:
            return self._reject(ValidationError(f"{field} holds at most {MAX_LEADS} values, got {len(values)}"))
        low, high = bounds
        for value in values:
            if not _is_int(value) or not low <= value <= high:
                return self._reject(ValidationError(f"{field} values must be between {low} and {high}, got {value!r}"))
        return self._assign(field, values + [0] * (MAX_LEADS - len(values)))

    def _assign_date(self, field: str, value: DateLike) -> bool:
        try:
            day_month_year = parse_date(value, self.config.ishne.date_formats)
        except ParseError as e:
            return self._reject(e)
        return self._assign(field, day_month_year)

    # Structure

    def set_var_length_block_size(self, size: int) -> bool:
        """Declare the variable block size; consistency is checked at assembly."""
        return self._assign_int("var_length_block_size", size)

    def set_variable_block(self, data: Optional[Union[str, bytes]]) -> bool:
        """Store a variable block and declare its size; ``None`` removes it."""
        if data is None:
            self._header.variable = None
            self._header.fixed.var_length_block_size = 0
            return self._accept()
        try:
            block = VariableBlock(data=data)
        except PydanticValidationError as e:
            return self._reject(ValidationError(f"Invalid variable block: {_describe(e)}"))
        self._header.variable = block
        self._header.fixed.var_length_block_size = block.size
        return self._accept()

    def set_file_version(self, version: int) -> bool:
        return self._assign_int("file_version", version)

    def set_number_of_leads(self, n: int) -> bool:
        """Number of stored leads, 0 to 12."""
        return self._assign_int("n_leads", n)

    def set_sampling_rate(self, rate: int = DEFAULT_SAMPLING_RATE) -> bool:
        """Sampling rate in Hz."""
        return self._assign_in_range("sampling_rate", rate, SAMPLING_RATE_RANGE)

    # Subject

    def set_first_name(self, name: str) -> bool:
        return self._assign("first_name", name)

    def set_last_name(self, name: str) -> bool:
        return self._assign("last_name", name)

    def set_id(self, subject_id: str) -> bool:
        return self._assign("subject_id", subject_id)

    def set_sex(self, sex: str) -> bool:
        """Accepts exactly ``"Man"`` or ``"Woman"``."""
        code = SEX_CODES.get(sex) if isinstance(sex, str) else None
        if code is None:
            return self._reject(ValidationError(f"Sex must be one of {sorted(SEX_CODES)}, got {sex!r}"))
        return self._assign("sex", int(code))

    def set_race(self, race: int) -> bool:
        """0: unknown, 1: Caucasian, 2: Black, 3: Oriental, 4-9: reserved."""
        return self._assign_in_range("race", race, (0, 9))

    def set_birth_date(self, value: DateLike) -> bool:
        return self._assign_date("birth_date", value)

    # Recording

    def set_record_date(self, value: DateLike) -> bool:
        return self._assign_date("record_date", value)

    def set_file_date(self, value: DateLike) -> bool:
        return self._assign_date("file_date", value)

    def set_start_time(self, value: TimeLike) -> bool:
        try:
            hour_minute_second = parse_time(value)
        except ParseError as e:
            return self._reject(e)
        return self._assign("start_time", hour_minute_second)

    def set_lead_spec(self, codes: Sequence[int]) -> bool:
        """Lead specification codes, one per lead, zero-padded to 12."""
        return self._assign_lead_values("lead_spec", codes, LEAD_SPEC_RANGE)

    def set_lead_quality(self, codes: Sequence[int]) -> bool:
        """Lead quality codes, one per lead, zero-padded to 12."""
        return self._assign_lead_values("lead_qual", codes, LEAD_QUALITY_RANGE)

    def set_resolution(self, values: Sequence[int]) -> bool:
        """Amplitude resolution per lead in nV."""
        return self._assign_lead_values("resolution", values, RESOLUTION_RANGE)

    def set_pacemaker(self, code: int) -> bool:
        return self._assign_in_range("pacemaker", code, PACEMAKER_RANGE)

    def set_recorder(self, recorder: str) -> bool:
        return self._assign("recorder", recorder)

    def set_proprietary(self, text: str) -> bool:
        return self._assign("proprietary", text)

    def set_copyright(self, text: str) -> bool:
        return self._assign("copyright", text)

    def set_reserved(self, data: bytes) -> bool:
        """Contents of the 88-byte reserved area (zero-padded)."""
        if not isinstance(data, (bytes, bytearray)):
            return self._reject(ValidationError("Reserved area must be bytes"))
        return self._assign("reserved", bytes(data))
