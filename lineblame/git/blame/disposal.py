"""
Scoped resource release.

Every long-lived dependency (cache, listeners, status bar, error
reporter, configuration holder) is registered with one
DisposalCoordinator owned by the composition root.
"""

from typing import Any, List

from lineblame.util.disposable import Disposable


class DisposalCoordinator:
    """
    Ordered list of scoped resources released exactly once.

    A resource is anything with a ``dispose()`` method. Resources are
    released in registration order; one failing does not stop the rest.
    """

    def __init__(self):
        self._resources: List[Any] = []
        self._disposed = False

    def add(self, *resources: Any) -> None:
        if self._disposed:
            raise RuntimeError("Cannot register resources after disposal")
        self._resources.extend(resources)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __len__(self) -> int:
        return len(self._resources)

    def dispose(self) -> List[BaseException]:
        """
        Release every registered resource.

        Returns:
            Errors raised by individual resources (already reported)
        """
        if self._disposed:
            return []

        self._disposed = True
        resources, self._resources = self._resources, []
        errors: List[BaseException] = []

        for resource in resources:
            try:
                resource.dispose()
            except Exception as e:
                print(f"[Dispose] Failed to release {type(resource).__name__}: {e}")
                errors.append(e)

        return errors
