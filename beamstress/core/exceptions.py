class DegenerateSectionError(ValueError):
    """Raised when a stress formula would divide by a zero section property.

    Parameters
    ----------
    quantity : :any:`str`
        Name of the offending section property, e.g. ``'mom_of_int'``.
    value : :any:`float`
        The value found for that property.
    """

    def __init__(self, quantity: str, value: float):
        self.quantity = quantity
        self.value = value
        super().__init__(
            f'{quantity} must be non-zero and finite to evaluate stresses, '
            f'got {quantity} = {value}.'
        )
