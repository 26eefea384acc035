'''
3D unsteady panel method - source/doublet solver
date: 2 Oct 2017

Solves for the source and doublet distributions over a set of bodies moving
through a uniform free stream. The Dirichlet boundary condition is imposed at
collocation points just inside the surfaces (Ref.[1], sec. 12.3). Lifting
surfaces shed a wake whose newest row of panels is linked to the trailing edge
doublets through the Kutta condition (Ref.[1], sec. 13.12). The inviscid
solution can be iterated with a boundary layer model per surface.

Time-marching of the wakes is implemented in upm3d_dyn.

Ref.[1]: Katz and Plotkin, Low speed aerodynamics
Ref.[2]: Giesing, Nonlinear two-dimensional unsteady potential flow with lift,
		 Journal of Aircraft, 1968.
Ref.[3]: Dragos, Mathematical Methods in Aerodynamics, Springer, 2003.
'''

import os
import time
import warnings
import numpy as np
import scipy.sparse.linalg as scsplin
import multiprocessing as mpr

from parameters import Parameters
import save


class Solver():
	'''
	Panel method solver. Bodies are registered with add_body; the panels of
	all non-wake surfaces are then stacked in a single index space, in order
	of registration (for each body: non-lifting surfaces, then lifting
	surfaces).
	'''

	def __init__(self,log_folder='./res/',par=None):

		if par is None:
			par=Parameters()
		self.par=par
		self.log_folder=log_folder

		# flow
		self.freestream_velocity=np.zeros((3,))
		self.fluid_density=0.0

		# bodies and surfaces (SurfaceData)
		self.bodies=[]
		self.non_wake_surfaces=[]
		self.surface_id_to_body={}
		self.surface_offset={}
		self.n_non_wake_panels=0

		# global per-panel vectors
		self.doublet_coefficients=np.zeros((0,))
		self.source_coefficients=np.zeros((0,))
		self.surface_velocity_potentials=np.zeros((0,))
		self.previous_surface_velocity_potentials=np.zeros((0,))
		self.surface_velocities=np.zeros((0,3))
		self.pressure_coefficients=np.zeros((0,))

		# info on last solution
		self.boundary_layer_iterations=0
		self.linear_solver_iterations=0
		self.linear_solver_error=0.0

		# settings
		self.PROCESSORS=4
		self.parallel=False
		self._verbose=True


	def _print(self,msg):
		if self._verbose:
			print('Solver: %s'%msg)


	# ---------------------------------------------------------- registration

	def add_body(self,body):
		'''
		Register body. The global per-panel vectors are extended, existing
		values are retained.
		'''

		self.bodies.append(body)

		Mold=self.n_non_wake_panels
		for d in body.surfaces():
			self.non_wake_surfaces.append(d)
			self.surface_id_to_body[d.surface.id]=body
			self.surface_offset[d.surface.id]=self.n_non_wake_panels
			self.n_non_wake_panels+=d.surface.n_panels()
		for d in body.lifting_surfaces:
			self.surface_id_to_body[d.wake.id]=body

		Mnew=self.n_non_wake_panels-Mold
		self.doublet_coefficients=np.concatenate(
								[self.doublet_coefficients,np.zeros((Mnew,))])
		self.source_coefficients=np.concatenate(
								 [self.source_coefficients,np.zeros((Mnew,))])
		self.surface_velocity_potentials=np.concatenate(
						 [self.surface_velocity_potentials,np.zeros((Mnew,))])
		self.previous_surface_velocity_potentials=np.concatenate(
				[self.previous_surface_velocity_potentials,np.zeros((Mnew,))])
		self.surface_velocities=np.concatenate(
								 [self.surface_velocities,np.zeros((Mnew,3))])
		self.pressure_coefficients=np.concatenate(
							   [self.pressure_coefficients,np.zeros((Mnew,))])

		return self


	def set_freestream_velocity(self,value):
		self.freestream_velocity=np.asarray(value,dtype=float)


	def set_fluid_density(self,value):
		self.fluid_density=value


	def _lifting_surfaces(self):
		''' Yields (body, LiftingSurfaceData, offset) for all lifting surfaces '''

		for body in self.bodies:
			for d in body.lifting_surfaces:
				yield body, d, self.surface_offset[d.surface.id]


	def _panel_index(self,surface,panel,caller):
		'''
		Global index of panel on surface. Returns None, and issues a warning,
		if the panel is not found.
		'''

		if surface.id not in self.surface_offset or \
									  panel<0 or panel>=surface.n_panels():
			warnings.warn('%s: panel %d not found on surface %d.'
													 %(caller,panel,surface.id))
			return None
		return self.surface_offset[surface.id]+panel


	# ------------------------------------------------------ field evaluation

	def compute_disturbance_velocity_potential(self,x):
		'''
		Disturbance potential at points x (3,) or (N,3), from all surfaces and
		wakes.
		'''

		X=np.atleast_2d(np.asarray(x,dtype=float))
		phi=np.zeros((X.shape[0],))

		for d in self.non_wake_surfaces:
			off=self.surface_offset[d.surface.id]
			for pp in range(d.surface.n_panels()):
				src,dbl=d.surface.source_and_doublet_influence(X,pp)
				phi+=dbl*self.doublet_coefficients[off+pp]
				phi+=src*self.source_coefficients[off+pp]

		for body,d,off in self._lifting_surfaces():
			for pp in range(d.wake.n_panels()):
				phi+=d.wake.doublet_influence(X,pp)*\
											   d.wake.doublet_coefficients[pp]

		if np.ndim(x)==1:
			return phi[0]
		return phi


	def compute_disturbance_velocity(self,x):
		'''
		Disturbance velocity at points x (3,) or (N,3), from all surfaces and
		wakes.
		'''

		X=np.atleast_2d(np.asarray(x,dtype=float))
		V=np.zeros(X.shape)

		for d in self.non_wake_surfaces:
			off=self.surface_offset[d.surface.id]
			for pp in range(d.surface.n_panels()):
				V+=d.surface.vortex_ring_unit_velocity(X,pp)*\
											   self.doublet_coefficients[off+pp]
				V+=d.surface.source_unit_velocity(X,pp)*\
												self.source_coefficients[off+pp]

		for body,d,off in self._lifting_surfaces():
			if d.wake.n_panels()>=d.lifting_surface.n_spanwise_panels():
				for pp in range(d.wake.n_panels()):
					V+=d.wake.vortex_ring_unit_velocity(X,pp)*\
											   d.wake.doublet_coefficients[pp]

		if np.ndim(x)==1:
			return V[0]
		return V


	def velocity_potential(self,x):
		''' Total velocity potential at x (3,) or (N,3) '''
		return self.compute_disturbance_velocity_potential(x)+\
								 np.dot(x,self.freestream_velocity)


	def velocity(self,x):
		''' Total velocity at x (3,) or (N,3) '''
		return self.compute_disturbance_velocity(x)+self.freestream_velocity


	def _velocity_parall(self,X,pool):
		''' As velocity, with the points split over the pool processes '''

		results=[]
		for Xblock in np.array_split(X,self.PROCESSORS):
			if Xblock.shape[0]>0:
				results.append(pool.apply_async(self.velocity,args=(Xblock,)))

		return np.concatenate([p.get() for p in results],axis=0)


	# --------------------------------------------------------------- queries

	def surface_velocity_potential(self,surface,panel):
		nn=self._panel_index(surface,panel,'surface_velocity_potential')
		if nn is None:
			return 0.0
		return self.surface_velocity_potentials[nn]


	def surface_velocity(self,surface,panel):
		nn=self._panel_index(surface,panel,'surface_velocity')
		if nn is None:
			return np.zeros((3,))
		return self.surface_velocities[nn,:].copy()


	def pressure_coefficient(self,surface,panel):
		nn=self._panel_index(surface,panel,'pressure_coefficient')
		if nn is None:
			return 0.0
		return self.pressure_coefficients[nn]


	# ------------------------------------------------------------------ loads

	def compute_reference_velocity_squared(self,body):
		return np.sum((body.velocity-self.freestream_velocity)**2)


	def _panel_forces(self,body):
		'''
		Yields collocation points and forces (pressure + friction) for all
		panels of body, surface by surface.
		'''

		qinf=0.5*self.fluid_density*self.compute_reference_velocity_squared(body)

		for d in body.surfaces():
			sf=d.surface
			off=self.surface_offset[sf.id]
			M=sf.n_panels()
			Cp=self.pressure_coefficients[off:off+M]
			# normals point outward: pressure acts along -n
			Fmat=-(qinf*sf.Amat*Cp)[:,None]*sf.Nmat
			for pp in range(M):
				Fmat[pp,:]+=d.boundary_layer.friction(pp)
			yield sf.Cmat, Fmat


	def force(self,body):
		''' Aerodynamic force on body '''

		Ftot=np.zeros((3,))
		for Cmat,Fmat in self._panel_forces(body):
			Ftot+=Fmat.sum(0)

		return Ftot


	def moment(self,body,x):
		''' Aerodynamic moment on body about point x '''

		Mtot=np.zeros((3,))
		for Cmat,Fmat in self._panel_forces(body):
			Mtot+=np.cross(Cmat-np.asarray(x,dtype=float),Fmat).sum(0)

		return Mtot


	# ---------------------------------------------------------- linear system

	def compute_source_coefficients(self,include_wake_influence):
		'''
		Source strength from the Neumann boundary condition:
			sigma = n.(V_kin - V_inf - V_wake) - V_blowing
		The wake contribution (all wake panels except the newest row, whose
		strength is not known yet) is included only if include_wake_influence
		and the wake is convected.
		'''

		for d in self.non_wake_surfaces:
			sf=d.surface
			off=self.surface_offset[sf.id]
			body=self.surface_id_to_body[sf.id]
			M=sf.n_panels()

			V=body.panel_kinematic_velocities(sf)-self.freestream_velocity
			if self.par.convect_wake and include_wake_influence:
				V-=self._old_wake_velocity(sf.Cmat)

			Vperp=np.einsum('ij,ij->i',V,sf.Nmat)
			for pp in range(M):
				Vperp[pp]-=d.boundary_layer.blowing_velocity(pp)
			self.source_coefficients[off:off+M]=Vperp


	def _old_wake_velocity(self,X):
		''' Velocity induced at X by the wake panels with known strength '''

		V=np.zeros(X.shape)
		for body,d,off in self._lifting_surfaces():
			Mold=d.wake.n_panels()-d.lifting_surface.n_spanwise_panels()
			for kk in range(Mold):
				V+=d.wake.vortex_ring_unit_velocity(X,kk)*\
											   d.wake.doublet_coefficients[kk]
		return V


	def _collocation_points(self):
		''' Collocation points of all panels, just below the surfaces '''

		Xc=np.zeros((self.n_non_wake_panels,3))
		for d in self.non_wake_surfaces:
			off=self.surface_offset[d.surface.id]
			Xc[off:off+d.surface.n_panels(),:]=d.surface.collocation_points(
						below_surface=True,delta=self.par.collocation_point_delta)
		return Xc


	def _get_AIC_rows(self,Xrows):
		'''
		Rows of the doublet and source influence coefficient matrices for the
		collocation points Xrows. The doublet of each new wake panel is
		expressed, through the Kutta condition, in terms of the doublets of
		the trailing edge panels: its influence is added to the upper panel
		column and subtracted from the lower panel one.
		'''

		Nrows=Xrows.shape[0]
		A=np.zeros((Nrows,self.n_non_wake_panels))
		S=np.zeros((Nrows,self.n_non_wake_panels))

		# influence between non-wake surfaces
		for d in self.non_wake_surfaces:
			off=self.surface_offset[d.surface.id]
			for jj in range(d.surface.n_panels()):
				src,dbl=d.surface.source_and_doublet_influence(Xrows,jj)
				A[:,off+jj]=dbl
				# source terms are moved to the right hand side
				S[:,off+jj]=-src

		# new wake panels
		for body,d,off in self._lifting_surfaces():
			ls=d.lifting_surface
			Mnew=ls.n_spanwise_panels()
			wake_panel_offset=d.wake.n_panels()-Mnew
			for jj in range(Mnew):
				pa=ls.trailing_edge_upper_panel(jj)
				pb=ls.trailing_edge_lower_panel(jj)
				infl=d.wake.doublet_influence(Xrows,wake_panel_offset+jj)
				A[:,off+pa]+=infl
				A[:,off+pb]-=infl

		return A, S


	def build_AIC(self,pool=None):
		'''
		Build the doublet (A) and source (S) influence coefficient matrices.
		If a pool is passed, blocks of rows are computed in parallel.
		'''

		Xc=self._collocation_points()

		if pool is None:
			return self._get_AIC_rows(Xc)

		results=[]
		for Xblock in np.array_split(Xc,self.PROCESSORS):
			if Xblock.shape[0]>0:
				results.append(pool.apply_async(self._get_AIC_rows,
															   args=(Xblock,)))
		AS=[p.get() for p in results]
		A=np.concatenate([aa for aa,ss in AS],axis=0)
		S=np.concatenate([ss for aa,ss in AS],axis=0)

		return A, S


	def _check_wakes(self):
		for body,d,off in self._lifting_surfaces():
			if d.wake.n_panels()<d.lifting_surface.n_spanwise_panels():
				raise NameError('Wake of body %s has no panels: '
						'initialize_wakes must be called before solve!'%body.id)


	def update_wake_doublet_coefficients(self):
		'''
		Kutta condition: the doublet of each newest wake panel equals the jump
		of doublet between upper and lower trailing edge panels.
		'''

		for body,d,off in self._lifting_surfaces():
			ls=d.lifting_surface
			Mnew=ls.n_spanwise_panels()
			wake_panel_offset=d.wake.n_panels()-Mnew
			for jj in range(Mnew):
				mu_top=self.doublet_coefficients[
										  off+ls.trailing_edge_upper_panel(jj)]
				mu_bottom=self.doublet_coefficients[
										  off+ls.trailing_edge_lower_panel(jj)]
				d.wake.doublet_coefficients[wake_panel_offset+jj]=\
															mu_top-mu_bottom


	# ------------------------------------------------------- surface velocity

	def compute_surface_velocity(self,surface,offset,panel):
		'''
		Velocity relative to the surface at the panel collocation point. The
		disturbance part is the surface gradient of -mu or, if
		par.marcov_surface_velocity, is computed with Marcov's formula
		(Ref.[3]). The normal component is removed, as this is (implicitly)
		accounted by the source term.
		'''

		if self.par.marcov_surface_velocity:
			xc=surface.panel_collocation_point(panel,False)
			Vt=self.compute_disturbance_velocity(xc)-0.5*\
				surface.scalar_field_gradient(self.doublet_coefficients,
																  offset,panel)
		else:
			Vt=-surface.scalar_field_gradient(self.doublet_coefficients,
																  offset,panel)

		body=self.surface_id_to_body[surface.id]
		Vapp=body.panel_kinematic_velocity(surface,panel)-\
													   self.freestream_velocity
		Vt=Vt-Vapp

		nv=surface.panel_normal(panel)
		return Vt-np.dot(Vt,nv)*nv


	def compute_surface_velocities(self):
		for d in self.non_wake_surfaces:
			sf=d.surface
			off=self.surface_offset[sf.id]
			for pp in range(sf.n_panels()):
				self.surface_velocities[off+pp,:]=\
									 self.compute_surface_velocity(sf,off,pp)


	# --------------------------------------------------------------- pressure

	def compute_surface_velocity_potential(self,surface,offset,panel):
		'''
		Total potential at the panel collocation point in the body frame.
		'''

		xc=surface.panel_collocation_point(panel,False)
		if self.par.marcov_surface_velocity:
			return self.velocity_potential(xc)

		phi=-self.doublet_coefficients[offset+panel]
		body=self.surface_id_to_body[surface.id]
		Vapp=body.panel_kinematic_velocity(surface,panel)-\
													   self.freestream_velocity
		phi-=np.dot(Vapp,xc)

		return phi


	def compute_surface_velocity_potential_time_derivative(self,offset,panel,dt):
		'''
		Time derivative of the potential in the body frame (Ref.[2]), by
		backward differences.
		'''

		if self.par.unsteady_bernoulli and dt>0.0:
			return (self.surface_velocity_potentials[offset+panel]-
					   self.previous_surface_velocity_potentials[offset+panel])/dt
		return 0.0


	def compute_pressure_coefficient(self,surface_velocity,dphidt,v_ref_squared):
		''' Unsteady Bernoulli equation '''

		if v_ref_squared==0.0:
			return 0.0
		return 1.0-(np.dot(surface_velocity,surface_velocity)+2.*dphidt)/\
																  v_ref_squared


	def compute_pressure_distribution(self,dt):
		for d in self.non_wake_surfaces:
			sf=d.surface
			off=self.surface_offset[sf.id]
			body=self.surface_id_to_body[sf.id]
			v_ref_squared=self.compute_reference_velocity_squared(body)

			for pp in range(sf.n_panels()):
				self.surface_velocity_potentials[off+pp]=\
							self.compute_surface_velocity_potential(sf,off,pp)
				dphidt=self.compute_surface_velocity_potential_time_derivative(
																	off,pp,dt)
				self.pressure_coefficients[off+pp]=\
							self.compute_pressure_coefficient(
								self.surface_velocities[off+pp,:],dphidt,
																  v_ref_squared)


	# ------------------------------------------------------------------ solve

	def _get_state(self):
		''' Copy of solution arrays, used to restore a failed step '''

		state={'doublet_coefficients':self.doublet_coefficients.copy(),
			   'source_coefficients':self.source_coefficients.copy(),
			   'surface_velocities':self.surface_velocities.copy(),
			   'surface_velocity_potentials':
									   self.surface_velocity_potentials.copy(),
			   'pressure_coefficients':self.pressure_coefficients.copy()}
		state['wakes']=[d.wake.doublet_coefficients.copy()
									for body,d,off in self._lifting_surfaces()]
		return state


	def _set_state(self,state):
		for key in state:
			if key!='wakes':
				setattr(self,key,state[key])
		for mu_w,(body,d,off) in zip(state['wakes'],self._lifting_surfaces()):
			d.wake.doublet_coefficients[:]=mu_w


	def solve_doublet_distribution(self,A,b):
		'''
		Solve A mu = b with BiCGSTAB, starting from the current doublet
		distribution. Returns the solution and the solver info flag (0 on
		success).
		'''

		self.linear_solver_iterations=0
		def count(xk):
			self.linear_solver_iterations+=1

		mu,info=scsplin.bicgstab(A,b,x0=self.doublet_coefficients.copy(),
								 rtol=self.par.linear_solver_tolerance,
								 atol=0.0,
								 maxiter=self.par.linear_solver_max_iterations,
								 callback=count)

		bnorm=np.linalg.norm(b)
		if bnorm>0.:
			self.linear_solver_error=np.linalg.norm(b-np.dot(A,mu))/bnorm
		else:
			self.linear_solver_error=0.0

		return mu, info


	def solve(self,dt=0.0,propagate=True):
		'''
		Compute source, doublet and pressure distributions at the current
		time-step. The inviscid solution is iterated with the boundary layers
		until the change in doublet distribution is below
		par.boundary_layer_iteration_tolerance.

		Returns True on success. If the linear solver does not converge, False
		is returned and the solution is left as at the beginning of the step.
		'''

		self._check_wakes()
		start_time=time.time()
		state0=self._get_state()

		pool=None
		if self.parallel:
			pool=mpr.Pool(processes=self.PROCESSORS)

		try:
			Nit=0
			while True:
				# source distribution
				self._print('Computing source distribution with wake influence.')
				self.compute_source_coefficients(include_wake_influence=True)

				# influence coefficients
				self._print('Computing matrices of influence coefficients.')
				A,S=self.build_AIC(pool)

				# doublet distribution
				self._print('Computing doublet distribution.')
				b=np.dot(S,self.source_coefficients)
				mu,info=self.solve_doublet_distribution(A,b)

				if info!=0:
					warnings.warn('Solver: Computing doublet distribution failed '
						'(%d iterations with estimated error=%.3e).'
						%(self.linear_solver_iterations,self.linear_solver_error))
					self._set_state(state0)
					return False

				self._print('Done computing doublet distribution in %d '
					'iterations with estimated error %.3e.'
					%(self.linear_solver_iterations,self.linear_solver_error))

				# check convergence from second iteration onward: at first
				# iteration, doublet_coefficients come from the previous step
				converged=False
				if Nit>0:
					if np.linalg.norm(mu-self.doublet_coefficients)<\
								   self.par.boundary_layer_iteration_tolerance:
						converged=True
				self.doublet_coefficients=mu

				# wake doublet distribution
				self._print('Updating wake doublet distribution.')
				self.update_wake_doublet_coefficients()

				# surface velocities
				self._print('Computing surface velocity distribution.')
				self.compute_surface_velocities()

				if converged:
					self._print('Boundary layer iteration converged.')
					break

				if Nit>self.par.max_boundary_layer_iterations:
					warnings.warn('Solver: Maximum number of boundary layer '
										   'iterations reached. Aborting iteration.')
					break

				# recompute boundary layers
				have_boundary_layer=False
				for d in self.non_wake_surfaces:
					if not d.boundary_layer.is_passive():
						have_boundary_layer=True
						off=self.surface_offset[d.surface.id]
						d.boundary_layer.recalculate(
							self.surface_velocities[off:off+d.surface.n_panels(),:])

				# no feedback, no iteration
				if not have_boundary_layer:
					break

				Nit+=1

			self.boundary_layer_iterations=Nit

			if self.par.convect_wake:
				self._print('Recomputing source distribution without wake '
																  'influence.')
				self.compute_source_coefficients(include_wake_influence=False)

			self._print('Computing pressure distribution.')
			self.compute_pressure_distribution(dt)

		finally:
			if pool is not None:
				pool.close()
				pool.join()

		if propagate:
			self.propagate()

		self._exec_time=time.time()-start_time
		self._print('Done in %.1f sec!'%self._exec_time)

		return True


	def propagate(self):
		''' Store current potentials for the time derivative at next step '''
		self.previous_surface_velocity_potentials=\
										self.surface_velocity_potentials.copy()


	# ---------------------------------------------------------------- logging

	def log(self,step_number,writer):
		'''
		Write doublet, source and pressure distributions of all surfaces and
		wakes, one file per surface and step, under
			log_folder/body.id/{non_lifting_surface_n,lifting_surface_n,wake_n}
		'''

		save_node_offset=0
		save_panel_offset=0
		ext=writer.file_extension()

		for body in self.bodies:
			body_folder=os.path.join(self.log_folder,body.id)

			for idx,d in enumerate(body.non_lifting_surfaces):
				sf=d.surface
				off=self.surface_offset[sf.id]
				M=sf.n_panels()
				folder=os.path.join(body_folder,'non_lifting_surface_%d'%idx)
				os.makedirs(folder,exist_ok=True)
				writer.write(sf,os.path.join(folder,'step_%d%s'%(step_number,ext)),
					save_node_offset,save_panel_offset,
					['DoubletDistribution','SourceDistribution',
													   'PressureDistribution'],
					[self.doublet_coefficients[off:off+M],
					 self.source_coefficients[off:off+M],
					 self.pressure_coefficients[off:off+M]])
				save_node_offset+=sf.n_nodes()
				save_panel_offset+=M

			for idx,d in enumerate(body.lifting_surfaces):
				sf=d.lifting_surface
				off=self.surface_offset[sf.id]
				M=sf.n_panels()
				folder=os.path.join(body_folder,'lifting_surface_%d'%idx)
				os.makedirs(folder,exist_ok=True)
				writer.write(sf,os.path.join(folder,'step_%d%s'%(step_number,ext)),
					save_node_offset,save_panel_offset,
					['DoubletDistribution','SourceDistribution',
													   'PressureDistribution'],
					[self.doublet_coefficients[off:off+M],
					 self.source_coefficients[off:off+M],
					 self.pressure_coefficients[off:off+M]])
				save_node_offset+=sf.n_nodes()
				save_panel_offset+=M

				folder=os.path.join(body_folder,'wake_%d'%idx)
				os.makedirs(folder,exist_ok=True)
				writer.write(d.wake,
					os.path.join(folder,'step_%d%s'%(step_number,ext)),
					save_node_offset,save_panel_offset,
					['DoubletDistribution'],
					[d.wake.doublet_coefficients.copy()])
				save_node_offset+=d.wake.n_nodes()
				save_panel_offset+=d.wake.n_panels()


	def save(self,savedir,h5filename):
		'''
		Save solution to h5 file: global vectors and, for each wake, nodes and
		doublet distribution.
		'''

		Sol=save.Output('solution').drop(
			n_non_wake_panels=self.n_non_wake_panels,
			freestream_velocity=self.freestream_velocity,
			fluid_density=self.fluid_density,
			doublet_coefficients=self.doublet_coefficients,
			source_coefficients=self.source_coefficients,
			surface_velocity_potentials=self.surface_velocity_potentials,
			surface_velocities=self.surface_velocities,
			pressure_coefficients=self.pressure_coefficients)

		Wakes=[]
		for nn,(body,d,off) in enumerate(self._lifting_surfaces()):
			Wakes.append(save.Output('wake_%.2d'%nn).drop(
							body=body.id,
							nodes=d.wake.nodes.copy(),
							doublet_coefficients=d.wake.doublet_coefficients.copy()))

		save.h5file(savedir,h5filename,*([Sol]+Wakes+self._save_extra()))


	def _save_extra(self):
		''' Further output classes to save '''
		return []
