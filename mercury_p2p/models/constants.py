ANY_SOURCE = -1
ANY_TAG = -1
