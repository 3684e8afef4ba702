'''
A server-rendered library catalog: Books, Authors, Genres and BookInstances.
'''

__version__ = '0.1.0'
