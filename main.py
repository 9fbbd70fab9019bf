from switchboard import configure_logging, dispatch


class Math:
    def add(self, a: int, b: int):
        """Add two integers."""
        print(int(a) + int(b))

    def divide(self, a: float, b: float = 1.0):
        """Divide a by b."""
        print(float(a) / float(b))

    @staticmethod
    def echo(*words):
        """Print the words back."""
        print(" ".join(words))

    def _scratch(self):
        pass


class Database:
    def list(self, table: str = None):
        """List the rows of a table."""
        print("listing", table or "everything")

    @classmethod
    def migrate(cls, steps: int = 1):
        """Apply pending migrations."""
        print("migrating", steps, "step(s)")


if __name__ == '__main__':
    configure_logging()
    dispatch({0: Math, "db": Database})
