"""Pickle-based save/load shared by the fitted interpolators."""

from __future__ import annotations

import os
import pickle
import warnings

_VERSION_KEY = "_pyinterp1d_version"


class _SerializableMixin:
    """Adds versioned ``save``/``load`` to classes exposing ``is_fitted``."""

    def __getstate__(self) -> dict:
        """Return picklable state tagged with the library version."""
        from pyinterp1d._version import __version__

        state = self.__dict__.copy()
        state[_VERSION_KEY] = __version__
        return state

    def __setstate__(self, state: dict) -> None:
        """Restore state from a pickled dict."""
        from pyinterp1d._version import __version__

        saved_version = state.pop(_VERSION_KEY, None)
        if saved_version is not None and saved_version != __version__:
            warnings.warn(
                f"This object was saved with pyinterp1d {saved_version}, "
                f"but you are loading it with {__version__}. "
                f"Evaluation results may differ if internal data layout "
                f"changed.",
                UserWarning,
                stacklevel=2,
            )
        self.__dict__.update(state)

    def save(self, path: str | os.PathLike) -> None:
        """Save the fitted interpolator to a file.

        Parameters
        ----------
        path : str or path-like
            Destination file path.

        Raises
        ------
        RuntimeError
            If the interpolator has not been fitted yet.
        """
        if not self.is_fitted:
            raise RuntimeError(
                f"Cannot save an unfitted {type(self).__name__}. "
                f"Call fit() first."
            )
        with open(os.fspath(path), "wb") as f:
            pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | os.PathLike):
        """Load a previously saved interpolator from a file.

        The loaded object can predict immediately; no refit is needed.

        Parameters
        ----------
        path : str or path-like
            Path to the saved file.

        Returns
        -------
        object
            The restored interpolator, an instance of ``cls``.

        Raises
        ------
        TypeError
            If the file holds an object of another class.

        Warns
        -----
        UserWarning
            If the file was saved with a different pyinterp1d version.

        .. warning::

            This method uses :mod:`pickle` internally.  Pickle can execute
            arbitrary code during deserialization.  **Only load files you
            trust.**
        """
        with open(os.fspath(path), "rb") as f:
            obj = pickle.load(f)  # noqa: S301
        if not isinstance(obj, cls):
            raise TypeError(
                f"Expected a {cls.__name__} instance, "
                f"got {type(obj).__name__}"
            )
        return obj
