'''
@date: 5 Oct 2017
@brief: smoke tests for post-processing and motion plots
@note: figures are drawn with a non-interactive backend and closed.
'''
import os, sys
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)),'..'))

import numpy  as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

import upm3d_dyn as upm
import pp_upm3d as pp
import set_dyn
import geo
from body import Body

import unittest



class Test_pp(unittest.TestCase):
	'''
	Each method defined in this class contains a test case.
	@warning: by default, only functions whose name starts with 'test' is run.
	'''

	def setUp(self):
		''' Plunging wing and sphere, solved over a few time-steps '''

		S=upm.Solver()
		S._verbose=False
		Bs=Body('sphere')
		Bs.add_non_lifting_surface(geo.build_sphere(0.5,4,6,centre=(0.,5.,0.)))
		Bw=Body('wing')
		Bw.add_lifting_surface(geo.build_wing(1.,4.,4,2,alpha=.05))
		S.add_body(Bs)
		S.add_body(Bw)
		S.set_freestream_velocity([1.,0.,0.])
		S.set_fluid_density(1.)

		self.motion=set_dyn.plunge(Bw,0.5,0.01)
		self.assertTrue(S.solve_dyn(0.3,0.1,self.motion))
		self.S,self.Bw=S,Bw


	def tearDown(self):
		plt.close('all')


	def test_grid(self):
		ax,fig=pp.visualise_grid(self.S)
		# two surfaces and one wake
		self.assertEqual(len(ax.collections),3)
		ax,fig=pp.visualise_grid(self.S,figname='no wake',wake=False)
		self.assertEqual(len(ax.collections),2)


	def test_panel_field(self):
		for field in ['pressure','doublet','source']:
			ax,fig=pp.panel_field(self.S,field)
			self.assertEqual(len(ax.collections),2)
		with self.assertRaises(KeyError):
			pp.panel_field(self.S,'vorticity')


	def test_chordwise_cp(self):
		ls=self.Bw.lifting_surfaces[0].lifting_surface
		ax,fig=pp.chordwise_cp(self.S,ls,1)
		line=ax.get_lines()[0]
		off=self.S.surface_offset[ls.id]
		Nc=ls.n_chordwise_panels()
		self.assertTrue(np.array_equal(line.get_ydata(),
			            self.S.pressure_coefficients[off+Nc:off+2*Nc]))


	def test_histories(self):
		ax,fig=pp.force_history(self.S,body_index=1)
		self.assertEqual(len(fig.axes),2)
		self.assertTrue(np.array_equal(ax.get_lines()[2].get_ydata(),
			                                       self.S.THforce[:,1,2]))
		self.assertTrue(np.array_equal(fig.axes[1].get_lines()[2].get_ydata(),
			                                      self.S.THmoment[:,1,2]))

		pos0=self.Bw.position.copy()
		fig=set_dyn.visualise_motion(self.S,self.motion,self.Bw)
		self.assertEqual(len(fig.axes),2)
		zexp=0.01*(1.-np.cos(np.pi*self.S.time))
		self.assertTrue(np.allclose(fig.axes[0].get_lines()[2].get_ydata(),
			                                                  zexp,atol=1e-14))
		# kinematics restored at t=0
		self.assertTrue(np.allclose(self.Bw.position,[0.,0.,0.],atol=1e-14))
		self.assertFalse(np.allclose(pos0,self.Bw.position,atol=1e-14))



if __name__=='__main__':

	unittest.main()
