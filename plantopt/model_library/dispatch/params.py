#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## loads and validates input dispatch data
from pyomo.environ import *
import math

from plantopt.common.errors import ConfigurationError
from plantopt.data.data_utils import is_time_series, time_series_values
from plantopt.data.timeline import Timeline
from plantopt.common.log import logger

from .dispatch_utils import add_model_attr, dispatch_time_helper
from .fuel_consumption import partial_load_fuel_coefficients

component_name = 'data_loader'

valid_generator_types = ['renewable', 'thermal']

def _configuration_error(msg):
    logger.error("DATA ERROR: " + msg)
    raise ConfigurationError(msg)

def _is_number(v):
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)

def _get_series(element_type, name, attr, att, num_time_periods):
    if is_time_series(att):
        values = att['values']
        if len(values) != num_time_periods:
            _configuration_error("{} {} has {} values for {}, but the horizon has {} time periods".format(
                                 element_type, name, len(values), attr, num_time_periods))
    values = time_series_values(att, num_time_periods)
    for v in values:
        if not _is_number(v):
            _configuration_error("{} {} has a non-numeric or non-finite value {} for {}".format(element_type, name, v, attr))
    return values

def _get_scalar(element_type, name, elem, attr, default=None, required=False):
    if attr not in elem:
        if required:
            _configuration_error("{} {} is missing the required attribute {}".format(element_type, name, attr))
        return default
    v = elem[attr]
    if not _is_number(v):
        _configuration_error("{} {} has a non-numeric or non-finite value {} for {}".format(element_type, name, v, attr))
    return v

def _get_cost(element_type, name, elem, attr):
    v = _get_scalar(element_type, name, elem, attr, default=0.)
    if v < 0:
        _configuration_error("{} {} has a negative {}={}".format(element_type, name, attr, v))
    return v

def _get_capacity_limit(element_type, name, elem):
    v = _get_scalar(element_type, name, elem, 'capacity_limit')
    if v is None:
        return None
    if v < 0:
        _configuration_error("{} {} has capacity_limit={}, which must be finite and non-negative".format(element_type, name, v))
    return v

def _validate_renewable(name, gen, num_time_periods):
    if 'capacity_factor' not in gen:
        _configuration_error("Generator {} is missing the required attribute capacity_factor".format(name))
    cf = _get_series('Generator', name, 'capacity_factor', gen['capacity_factor'], num_time_periods)
    for v in cf:
        if v < 0. or v > 1.:
            _configuration_error("Generator {} has capacity_factor {} outside [0,1]".format(name, v))
    _get_cost('Generator', name, gen, 'investment_cost')
    limit = _get_capacity_limit('Generator', name, gen)

    if limit is None:
        return [ math.inf if v > 0. else 0. for v in cf ]
    return [ v*limit for v in cf ]

def _validate_thermal(name, gen, num_time_periods, binary_commitment, relax_binaries):
    for attr in ('investment_cost', 'fuel_cost', 'startup_cost'):
        _get_cost('Generator', name, gen, attr)

    efficiency_min = _get_scalar('Generator', name, gen, 'efficiency_min', required=True)
    efficiency_max = _get_scalar('Generator', name, gen, 'efficiency_max', required=True)
    limit = _get_capacity_limit('Generator', name, gen)
    capacity = math.inf if limit is None else limit

    if binary_commitment:
        for attr in ('fixed_cost', 'shutdown_cost'):
            _get_cost('Generator', name, gen, attr)
        p_max = _get_scalar('Generator', name, gen, 'p_max', required=True)
        p_min = _get_scalar('Generator', name, gen, 'p_min', default=0.)
        if p_max <= 0.:
            _configuration_error("Generator {} has p_max={}, which must be positive and finite".format(name, p_max))
        if p_min < 0. or p_min > p_max:
            _configuration_error("Generator {} has p_min={}, which must be in [0, p_max={}]".format(name, p_min, p_max))
        initial_status = gen.get('initial_status', 0)
        if initial_status not in (0, 1):
            _configuration_error("Generator {} has initial_status={}, which must be 0 or 1".format(name, initial_status))
        partial_load_min = p_min/p_max
        if capacity < p_max and not relax_binaries:
            ## committing requires the full rating installed
            logger.warning("Generator {} has capacity_limit={} below p_max={}, so it can never be committed".format(name, capacity, p_max))
            capacity = 0.
        else:
            capacity = min(capacity, p_max)
        first_period_capacity = capacity
    else:
        partial_load_min = _get_scalar('Generator', name, gen, 'partial_load_min', default=0.)
        if partial_load_min < 0. or partial_load_min >= 1.:
            _configuration_error("Generator {} has partial_load_min={}, which must be in [0,1)".format(name, partial_load_min))
        initial_online = _get_scalar('Generator', name, gen, 'initial_online_capacity', default=0.)
        if initial_online < 0.:
            _configuration_error("Generator {} has a negative initial_online_capacity={}".format(name, initial_online))
        cold_start = gen.get('cold_start', True)
        if not isinstance(cold_start, bool):
            _configuration_error("Generator {} has cold_start={}, which must be a bool".format(name, cold_start))
        first_period_capacity = 0. if cold_start else capacity

    try:
        partial_load_fuel_coefficients(efficiency_min, efficiency_max, partial_load_min)
    except ConfigurationError as e:
        _configuration_error("Generator {}: {}".format(name, e))

    return [first_period_capacity] + [capacity]*(num_time_periods-1)

def _validate_export(name, export):
    _get_scalar('Export', name, export, 'price', required=True)
    p_max = _get_scalar('Export', name, export, 'p_max')
    if p_max is not None and p_max < 0.:
        _configuration_error("Export {} has p_max={}, which must be finite and non-negative".format(name, p_max))

def validate_model_data(model_data, binary_commitment=False, relax_binaries=False):
    '''
    Checks the ModelData object for malformed or inconsistent data
    before any model component is built

    Parameters
    ----------
    model_data : plantopt.data.ModelData
    binary_commitment : bool (optional)
        If True, validate the attributes used by the unit commitment
        formulation (p_min, p_max, initial_status), otherwise those used by
        the partial-load formulation (partial_load_min, initial_online_capacity,
        cold_start). Default is False.
    relax_binaries : bool (optional)
        If True, a unit commitment generator may be committed fractionally,
        so a capacity_limit below p_max still counts toward the supply.
        Default is False.

    Raises
    ------
        ConfigurationError
    '''
    md = model_data
    system = md.data['system']

    time_keys = system.get('time_keys')
    if not time_keys:
        _configuration_error("system must provide a non-empty list of time_keys")
    num_time_periods = len(time_keys)

    time_period_length_minutes = system.get('time_period_length_minutes', 60)
    if not _is_number(time_period_length_minutes) or time_period_length_minutes <= 0:
        _configuration_error("time_period_length_minutes must be positive, found {}".format(time_period_length_minutes))

    demand = [0.]*num_time_periods
    for l, l_dict in md.elements(element_type='load'):
        if 'p_load' not in l_dict:
            _configuration_error("Load {} is missing the required attribute p_load".format(l))
        for i, v in enumerate(_get_series('Load', l, 'p_load', l_dict['p_load'], num_time_periods)):
            if v < 0.:
                _configuration_error("Load {} has negative demand {} at time period {}".format(l, v, i+1))
            demand[i] += v

    if not dict(md.elements(element_type='generator')):
        _configuration_error("The model data has no generators")

    supply_potential = [0.]*num_time_periods
    for g, g_dict in md.elements(element_type='generator'):
        gen_type = g_dict.get('generator_type')
        if gen_type not in valid_generator_types:
            _configuration_error("Generator {} has unrecognized generator_type {}, valid types are {}".format(g, gen_type, valid_generator_types))
        if gen_type == 'renewable':
            potential = _validate_renewable(g, g_dict, num_time_periods)
        else:
            potential = _validate_thermal(g, g_dict, num_time_periods, binary_commitment, relax_binaries)
        for i, v in enumerate(potential):
            supply_potential[i] += v

    for e, e_dict in md.elements(element_type='export'):
        _validate_export(e, e_dict)

    for i, (d, s) in enumerate(zip(demand, supply_potential)):
        if d > s:
            _configuration_error("Demand {} at time period {} exceeds the maximum possible supply {}".format(d, i+1, s))

@add_model_attr(component_name)
def load_params(model, model_data):
    '''
    This loads dispatch params from a ModelData object
    '''

    md = model_data
    model.model_data = model_data

    binary_commitment = getattr(model, 'binary_commitment', False)

    validate_model_data(md, binary_commitment, getattr(model, 'relax_binaries', False))

    system = md.data['system']

    renewable_gen_attrs = md.attributes(element_type='generator', generator_type='renewable')
    thermal_gen_attrs = md.attributes(element_type='generator', generator_type='thermal')
    load_attrs = md.attributes(element_type='load')
    export_attrs = md.attributes(element_type='export')

    #
    # Time
    #

    model.timeline = Timeline(system['time_keys'], system.get('time_period_length_minutes', 60))

    model.TimePeriodLengthMinutes = Param(within=PositiveReals, initialize=system.get('time_period_length_minutes', 60))

    ## IN HOURS, assert athat this must be a positive number
    model.TimePeriodLengthHours = Param(within=PositiveReals, initialize=model.timeline.time_period_length_hours)

    model.NumTimePeriods = Param(within=PositiveIntegers, initialize=len(model.timeline))

    model.InitialTime = Param(within=PositiveIntegers, initialize=model.timeline.first)
    model.TimePeriods = RangeSet(model.InitialTime, model.NumTimePeriods)

    TimeMapper = dispatch_time_helper(model.TimePeriods)

    #
    # Elements
    #

    model.RenewableGenerators = Set(initialize=renewable_gen_attrs['names'], ordered=True)
    model.ThermalGenerators = Set(initialize=thermal_gen_attrs['names'], ordered=True)
    model.Loads = Set(initialize=load_attrs['names'], ordered=True)
    model.Exports = Set(initialize=export_attrs['names'], ordered=True)

    ## optional upper bounds on installed capacity, None if unlimited
    model._renewable_capacity_limits = dict(renewable_gen_attrs.get('capacity_limit', dict()))
    model._thermal_capacity_limits = dict(thermal_gen_attrs.get('capacity_limit', dict()))

    #################################################################
    # demand, summed over all loads. over-supply is permitted,      #
    # unserved demand is not.                                       #
    #################################################################

    model.LoadDemand = Param(model.Loads, model.TimePeriods, within=NonNegativeReals,
                             initialize=TimeMapper(load_attrs.get('p_load', dict())))

    def demand_rule(m, t):
        return sum(m.LoadDemand[l,t] for l in m.Loads)
    model.Demand = Param(model.TimePeriods, within=NonNegativeReals, initialize=demand_rule)

    #################################################################
    # renewable generators: output is capacity factor times the     #
    # installed capacity                                            #
    #################################################################

    model.CapacityFactor = Param(model.RenewableGenerators, model.TimePeriods, within=UnitInterval,
                                 initialize=TimeMapper(renewable_gen_attrs.get('capacity_factor', dict())))

    model.RenewableInvestmentCost = Param(model.RenewableGenerators, within=NonNegativeReals, default=0.,
                                          initialize=renewable_gen_attrs.get('investment_cost', dict()))

    #################################################################
    # thermal (controllable) generators                             #
    #################################################################

    model.ThermalInvestmentCost = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                                        initialize=thermal_gen_attrs.get('investment_cost', dict()))
    model.FuelPrice = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                            initialize=thermal_gen_attrs.get('fuel_cost', dict()))
    model.StartupPrice = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                               initialize=thermal_gen_attrs.get('startup_cost', dict()))

    model.EfficiencyMin = Param(model.ThermalGenerators, within=PercentFraction,
                                initialize=thermal_gen_attrs.get('efficiency_min', dict()))

    def efficiency_max_validator(m, v, g):
        return v >= value(m.EfficiencyMin[g])
    model.EfficiencyMax = Param(model.ThermalGenerators, within=PercentFraction,
                                validate=efficiency_max_validator,
                                initialize=thermal_gen_attrs.get('efficiency_max', dict()))

    if binary_commitment:
        ## unit commitment: plants produce within [p_min, p_max] when on
        model.MinimumPowerOutput = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                                         initialize=thermal_gen_attrs.get('p_min', dict()))

        def maximum_power_output_validator(m, v, g):
            return v >= value(m.MinimumPowerOutput[g])
        model.MaximumPowerOutput = Param(model.ThermalGenerators, within=PositiveReals,
                                         validate=maximum_power_output_validator,
                                         initialize=thermal_gen_attrs.get('p_max', dict()))

        def partial_load_min_rule(m, g):
            return value(m.MinimumPowerOutput[g])/value(m.MaximumPowerOutput[g])
        model.PartialLoadMin = Param(model.ThermalGenerators, within=UnitInterval, initialize=partial_load_min_rule)

        model.FixedOperatingCost = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                                         initialize=thermal_gen_attrs.get('fixed_cost', dict()))
        model.ShutdownPrice = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                                    initialize=thermal_gen_attrs.get('shutdown_cost', dict()))

        ## the commitment state before the first time period
        model.UnitOnT0 = Param(model.ThermalGenerators, within=Binary, default=0,
                               initialize={ g : int(v) for g, v in thermal_gen_attrs.get('initial_status', dict()).items() })
    else:
        ## partial load: plants produce within [partial_load_min, 1] of their online capacity
        model.PartialLoadMin = Param(model.ThermalGenerators, within=UnitInterval, default=0.,
                                     initialize=thermal_gen_attrs.get('partial_load_min', dict()))

        ## the online capacity before the first time period
        model.InitialOnlineCapacity = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                                            initialize=thermal_gen_attrs.get('initial_online_capacity', dict()))
        model.ColdStart = Param(model.ThermalGenerators, within=Boolean, default=True,
                                initialize=thermal_gen_attrs.get('cold_start', dict()))

    #################################################################
    # export (sale of surplus energy). The export is always capped  #
    # so that a favorable price cannot make the model unbounded.    #
    #################################################################

    model.ExportPrice = Param(model.Exports, within=Reals, initialize=export_attrs.get('price', dict()))

    export_limits = export_attrs.get('p_max', dict())
    peak_demand = max(value(model.Demand[t]) for t in model.TimePeriods)

    def export_limit_rule(m, e):
        if e in export_limits:
            return export_limits[e]
        if value(m.ExportPrice[e]) > 0.:
            logger.warning("WARNING: Export {} has a positive price but no p_max; "
                           "capping it at the peak demand {}".format(e, peak_demand))
        else:
            logger.debug("Export {} has no p_max; capping it at the peak demand {}".format(e, peak_demand))
        return peak_demand
    model.ExportLimit = Param(model.Exports, within=NonNegativeReals, initialize=export_limit_rule)
