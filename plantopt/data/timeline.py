#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
The time horizon of a dispatch model.

Time periods are the integers 1..N, where N is the number of time keys
in the ModelData object. Time-coupled constraints use
:py:meth:`Timeline.predecessor`, which returns None for the first time
period; callers must then substitute the configured initial state
explicitly (e.g., UnitOnT0 or InitialOnlineCapacity).
"""


class Timeline(object):

    def __init__(self, time_keys, time_period_length_minutes=60):
        """
        Parameters
        ----------
        time_keys : list
            The time keys of the horizon, in order. Must be non-empty.
        time_period_length_minutes : int (optional)
            The length of each time period. Default is 60.
        """
        self._time_keys = tuple(time_keys)
        if len(self._time_keys) == 0:
            raise ValueError("Timeline requires at least one time key")
        if time_period_length_minutes <= 0:
            raise ValueError("time_period_length_minutes must be positive, found {}".format(time_period_length_minutes))
        self._time_period_length_minutes = time_period_length_minutes

    def __len__(self):
        return len(self._time_keys)

    def __iter__(self):
        return iter(range(self.first, self.last+1))

    def __contains__(self, t):
        return isinstance(t, int) and self.first <= t <= self.last

    @property
    def first(self):
        return 1

    @property
    def last(self):
        return len(self._time_keys)

    @property
    def time_keys(self):
        return list(self._time_keys)

    @property
    def time_period_length_hours(self):
        return self._time_period_length_minutes/60.

    def predecessor(self, t):
        ''' the time period before t, or None if t is the first time period '''
        if t not in self:
            raise KeyError("Time period {} is not in the horizon 1..{}".format(t, self.last))
        if t == self.first:
            return None
        return t-1

    def time_key(self, t):
        ''' the ModelData time key for time period t '''
        if t not in self:
            raise KeyError("Time period {} is not in the horizon 1..{}".format(t, self.last))
        return self._time_keys[t-1]

    def __repr__(self):
        return 'Timeline(N={}, time_period_length_minutes={})'.format(len(self), self._time_period_length_minutes)
