import sys
import unittest


def run_tests():
    try:
        from beamstress import tests
    except ImportError:
        print("Error: Could not import beamstress.tests.")
        print("Make sure beamstress is installed, e.g. with "
              "'pip install -e .'.")
        sys.exit(1)

    suite = unittest.TestLoader().loadTestsFromModule(tests)

    # verbosity=0 only prints the summary
    result = unittest.TextTestRunner(verbosity=0).run(suite)
    sys.exit(not result.wasSuccessful())


if __name__ == '__main__':
    if len(sys.argv) > 1 and sys.argv[1] == 'test':
        run_tests()
    else:
        print("Unknown command.")
        print("Usage: python -m beamstress test")
