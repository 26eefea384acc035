'''
3D unsteady panel method
date: 2 Oct 2017

Solver settings.
@note: the linear solver tolerance is relative to the norm of the right hand
side (machine epsilon is not reachable by BiCGSTAB).
'''


class Parameters():
	'''
	Settings read by the solver. Values are meant to be set before a time-step
	and not modified while solve/update_wakes are running.

	Parameters can be passed as keywords:
		par=Parameters(convect_wake=False,static_wake_length=50.)
	'''

	def __init__(self,**kwargs):

		# wake
		self.convect_wake=True 			# if False, the wake is rebuilt
										# every step (no time history)
		self.static_wake_length=100.0	# length of static wake
		self.wake_emission_distance_factor=0.25
		self.wake_emission_follow_bisector=True

		# linear system
		self.linear_solver_max_iterations=20000
		self.linear_solver_tolerance=1e-10

		# boundary layer iteration
		self.max_boundary_layer_iterations=20
		self.boundary_layer_iteration_tolerance=1e-2

		# pressure
		self.unsteady_bernoulli=True
		self.marcov_surface_velocity=False

		# geometry
		self.collocation_point_delta=1e-12

		for kk in kwargs:
			if not hasattr(self,kk):
				raise NameError('Unknown parameter %s!'%kk)
			setattr(self,kk,kwargs[kk])


	def __repr__(self):
		return 'Parameters(%s)' %', '.join(
						['%s=%r'%(kk,vv) for kk,vv in sorted(self.__dict__.items())])
