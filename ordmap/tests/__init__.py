import os


SEED = int(os.environ.get('ORDMAP_TEST_SEED', '1234'))
