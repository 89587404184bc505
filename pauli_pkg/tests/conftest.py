import random, numpy as np

def pytest_configure():
    # Fresh random circuits, observables and angles on every run
    random.seed()                # system time
    np.random.seed()
