"""
RandomState — Явное состояние генератора случайных цифр

Ядро не держит глобального seed: каждый вызов генерации случайного BigZ
получает RandomState явно. Один и тот же seed воспроизводит ту же
последовательность.

Потокобезопасность: RandomState — изменяемый объект. Если несколько потоков
делят один экземпляр, доступ сериализует вызывающий (или каждому потоку
выдаётся свой RandomState).
"""

import random

from exactnum.core.math import natural


class RandomState:
    """
    Источник случайных бит для генерации BigZ.

    Обёртка над random.Random с доступом к seed, чтобы вызывающий мог
    сохранить и восстановить состояние генерации.
    """

    def __init__(self, seed: int = 0):
        """
        Инициализация состояния.

        Args:
            seed: начальное значение генератора (неотрицательное)
        """
        if seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        """Seed, с которого началась текущая последовательность."""
        return self._seed

    def reseed(self, seed: int) -> None:
        """Перезапуск последовательности с новым seed."""
        if seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        self._seed = seed
        self._rng.seed(seed)

    def random_digits(self, bits: int) -> natural.Digits:
        """
        Случайная magnitude из ровно bits равновероятных бит.

        Returns:
            нормализованный кортеж цифр, значение в [0, 2**bits)
        """
        count, remainder = divmod(bits, natural.DIGIT_BITS)
        natural.check_size(count + 1)

        out = [self._rng.getrandbits(natural.DIGIT_BITS) for _ in range(count)]
        if remainder:
            out.append(self._rng.getrandbits(remainder))
        return natural.normalize(out)

    def __repr__(self) -> str:
        return f"RandomState(seed={self._seed})"
