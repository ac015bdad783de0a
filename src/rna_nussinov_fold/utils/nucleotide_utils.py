def normalize_base(base_raw: str) -> str:
    """
    Upper-case a nucleotide base so pairing logic can be applied uniformly.

    Parameters
    ----------
    base_raw : str
        Raw single-character nucleotide base.

    Returns
    -------
    str
        Upper-cased base. Non-string or multi-character input is returned unchanged.
    """
    if not isinstance(base_raw, str):
        return base_raw

    if len(base_raw) != 1:
        return base_raw

    return base_raw.upper()


def normalize_sequence(raw_sequence: str) -> str:
    """
    Strip surrounding whitespace and upper-case a raw sequence string.

    No symbol translation is performed: a `T` stays a `T` and is rejected later
    by the sequence validator.

    Parameters
    ----------
    raw_sequence : str
        The sequence as supplied by the caller.

    Returns
    -------
    str
        The normalized sequence.
    """
    return raw_sequence.strip().upper()
