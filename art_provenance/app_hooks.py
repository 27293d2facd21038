from typing import Optional, Protocol


class AppHooks(Protocol):
    """
    Protocol for application hooks that follow batch extraction.

    An application (GUI, CLI, notebook) passes an object with these methods
    to ProvenanceExtractor.extract_many to show progress and to stop a long
    run early. Any method may be left out.
    """
    def report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False,
                    plus_step: int = 1) -> None:
        """
        Report progress of the batch.

        Args:
            info (str): Progress message.
            target (Optional[int]): Total number of steps, when starting.
            reset_counter (bool): Start counting from zero.
            plus_step (int): Steps completed since the last report.
        """
        pass

    def stop_requested(self) -> bool:
        """
        Check if a stop has been requested by the user.

        Returns:
            bool: True if stop is requested, False otherwise.
        """
        return False

    def update_key_value(self, key: str, value) -> None:
        """
        Report a status update with a key-value pair, such as the number of
        issues found so far.

        Args:
            key (str): Status key.
            value: Status value.
        """
        pass
