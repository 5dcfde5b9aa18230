# Licensed under the GPLv3 - see LICENSE
from astropy.utils import classproperty


__all__ = ['fixedvalue']


class fixedvalue(classproperty):
    """Property that is fixed for all instances of a class.

    Based on `astropy.utils.decorators.classproperty`, but with a setter
    that passes if the value equals the fixed value, so that it can be
    passed on to initializers like other properties, and otherwise raises
    a `ValueError`.
    """
    def __set__(self, instance, value):
        fixed_value = self.__get__(instance, type(instance))
        if value != fixed_value:
            raise ValueError('fixed property can only be set to {}.'
                             .format(fixed_value))
